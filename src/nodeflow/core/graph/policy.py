# src/nodeflow/core/graph/policy.py
"""
Política de conexão de arestas do editor.

O engine não aplica estas regras durante a run, mas depende delas:
    - `process` aceita no máximo 3 arestas de entrada
    - `input`, `prompt` e `iteration` aceitam 1 aresta de entrada; uma nova
      conexão substitui a anterior
    - `output` aceita arestas ilimitadas
    - uma aresta repetida (mesma origem e destino) é ignorada

`connect` devolve um novo Graph; o grafo original não é alterado.
"""

from __future__ import annotations

from typing import Hashable

from nodeflow.core.exceptions import EdgePolicyError

from .model import Edge, Graph
from .settings import NodeType

MAX_PROCESS_INPUTS = 3

SINGLE_INPUT_TYPES = frozenset({NodeType.INPUT, NodeType.PROMPT, NodeType.ITERATION})


def connect(graph: Graph, source: Hashable, target: Hashable) -> Graph:
    if not graph.has_node(source) or not graph.has_node(target):
        raise EdgePolicyError(
            message=f"Cannot connect unknown nodes: {source} -> {target}",
            details={"from": source, "to": target},
        )

    if any(e.source == source and e.target == target for e in graph.edges):
        return graph

    target_node = graph.node(target)
    inbound = [e for e in graph.edges if e.target == target]
    new_edge = Edge(id=f"edge-{source}-{target}", source=source, target=target)

    if target_node.type is NodeType.PROCESS and len(inbound) >= MAX_PROCESS_INPUTS:
        raise EdgePolicyError(
            message=f"Process block cannot have more than {MAX_PROCESS_INPUTS} inputs.",
            details={"node_id": target, "inbound": len(inbound)},
            hint="Remova uma das conexões existentes antes de adicionar outra.",
        )

    if target_node.type in SINGLE_INPUT_TYPES:
        kept = [e for e in graph.edges if e.target != target]
        return graph.with_edges([*kept, new_edge])

    return graph.with_edges([*graph.edges, new_edge])
