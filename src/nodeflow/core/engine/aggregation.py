# src/nodeflow/core/engine/aggregation.py
"""
Agregação das entradas de um nó.

Para um nó com arestas de entrada E (na ordem de declaração das arestas,
não na ordem topológica), coleta o artefato armazenado de cada origem,
descartando origens sem artefato (ausente ou vazio).

Política:
    - tipos multi-entrada (`process`, `output`): textos unidos por "\\n",
      com espaços nas pontas removidos
    - tipos de entrada única (`input`, `prompt`, `iteration`): o artefato
      da única aresta é usado literalmente
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Mapping, Tuple

from nodeflow.core.graph.model import Graph, Node
from nodeflow.core.graph.settings import MULTI_INPUT_TYPES


@dataclass(frozen=True)
class NodeInputs:
    texts: Tuple[str, ...] = ()
    edge_count: int = 0
    multi: bool = False

    @property
    def joined(self) -> str:
        return "\n".join(self.texts).strip()

    @property
    def text(self) -> str:
        """Entrada efetiva do nó conforme a política do seu tipo."""
        if not self.multi and len(self.texts) == 1:
            return self.texts[0]
        return self.joined

    def __bool__(self) -> bool:
        return bool(self.texts)


def gather_inputs(graph: Graph, node: Node, artifacts: Mapping[Hashable, str]) -> NodeInputs:
    edges = graph.inbound_edges(node.id)
    texts = tuple(
        artifacts[e.source]
        for e in edges
        if artifacts.get(e.source)
    )
    return NodeInputs(
        texts=texts,
        edge_count=len(edges),
        multi=node.type in MULTI_INPUT_TYPES,
    )
