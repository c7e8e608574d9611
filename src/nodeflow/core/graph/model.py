# src/nodeflow/core/graph/model.py
"""
Modelo validado de grafo (nós + arestas).

Este módulo define a representação imutável do workflow recebida pelo
engine no início de uma run. O grafo pertence ao editor e é passado por
valor: nenhum componente do engine o altera.

Invariantes:
    - IDs de nó são únicos
    - A ordem declarada de nós e arestas é preservada (é insumo do
      desempate determinístico do planner e da ordem de agregação)
    - Arestas com extremidade inexistente ("dangling") são mantidas no
      modelo, mas ignoradas pelo planner e pela agregação

Limites explícitos:
    - Não aplica a política de conexão do editor (ver `policy`)
    - Não detecta ciclos (ver `core.engine.planner`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Tuple

from nodeflow.core.exceptions import InvalidGraphError

from .settings import (
    SETTINGS_BY_TYPE,
    NodeSettings,
    NodeType,
    parse_settings,
    settings_to_dict,
)


@dataclass(frozen=True)
class Node:
    id: Hashable
    type: NodeType
    name: str
    settings: NodeSettings

    def __post_init__(self) -> None:
        expected = SETTINGS_BY_TYPE[self.type]
        if not isinstance(self.settings, expected):
            raise InvalidGraphError(
                message=f"Node '{self.name}' of type {self.type.value} has settings of type "
                f"{type(self.settings).__name__}",
                details={"node_id": self.id, "expected": expected.__name__},
            )


@dataclass(frozen=True)
class Edge:
    id: Hashable
    source: Hashable
    target: Hashable


@dataclass(frozen=True)
class Graph:
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()
    _index: Dict[Hashable, Node] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

        index: Dict[Hashable, Node] = {}
        for node in self.nodes:
            if node.id in index:
                raise InvalidGraphError(
                    message=f"Duplicate node id: {node.id}",
                    details={"node_id": node.id},
                )
            index[node.id] = node
        object.__setattr__(self, "_index", index)

    # -----------------------------
    # Consultas
    # -----------------------------
    def has_node(self, node_id: Hashable) -> bool:
        return node_id in self._index

    def node(self, node_id: Hashable) -> Node:
        return self._index[node_id]

    def is_dangling(self, edge: Edge) -> bool:
        return edge.source not in self._index or edge.target not in self._index

    def inbound_edges(self, node_id: Hashable) -> List[Edge]:
        """Arestas válidas que chegam em `node_id`, na ordem de declaração."""
        return [e for e in self.edges if e.target == node_id and not self.is_dangling(e)]

    # -----------------------------
    # Snapshot do editor
    # -----------------------------
    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Any]) -> "Graph":
        """Constrói o grafo a partir de `{nodes: [...], edges: [...]}`."""
        if not isinstance(snapshot, Mapping):
            raise InvalidGraphError(
                message="Graph snapshot must be a mapping with 'nodes' and 'edges'",
                details={"received": type(snapshot).__name__},
            )
        nodes = [_node_from_dict(raw) for raw in _entries(snapshot, "nodes")]
        edges = [_edge_from_dict(raw, i) for i, raw in enumerate(_entries(snapshot, "edges"))]
        return cls(nodes=tuple(nodes), edges=tuple(edges))

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "nodes": [
                {
                    "id": n.id,
                    "type": n.type.value,
                    "name": n.name,
                    "settings": settings_to_dict(n.settings),
                }
                for n in self.nodes
            ],
            "edges": [{"id": e.id, "from": e.source, "to": e.target} for e in self.edges],
        }

    def with_edges(self, edges: Iterable[Edge]) -> "Graph":
        return Graph(nodes=self.nodes, edges=tuple(edges))


def _entries(snapshot: Mapping[str, Any], key: str) -> List[Any]:
    value = snapshot.get(key) or []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise InvalidGraphError(
            message=f"Graph snapshot '{key}' must be a list",
            details={"received": type(value).__name__},
        )
    return list(value)


def _hashable(value: Any, what: str) -> Any:
    # ids viram chaves de índice e de artefatos
    try:
        hash(value)
    except TypeError:
        raise InvalidGraphError(
            message=f"{what} must be a scalar value, got {type(value).__name__}",
            details={"field": what, "received": type(value).__name__},
        ) from None
    return value


def _node_from_dict(raw: Any) -> Node:
    if not isinstance(raw, Mapping):
        raise InvalidGraphError(
            message="Node entry must be a mapping",
            details={"received": type(raw).__name__},
        )
    node_id = raw.get("id")
    if node_id is None:
        raise InvalidGraphError(message="Node entry is missing 'id'", details={"node": dict(raw)})
    _hashable(node_id, "Node id")

    raw_type = raw.get("type")
    try:
        node_type = NodeType(raw_type)
    except ValueError:
        raise InvalidGraphError(
            message=f"Unknown node type: {raw_type}",
            details={"node_id": node_id, "type": raw_type},
        ) from None

    name = raw.get("name")
    if not isinstance(name, str) or not name:
        name = f"{node_type.value.capitalize()} {node_id}"

    return Node(
        id=node_id,
        type=node_type,
        name=name,
        settings=parse_settings(node_type, raw.get("settings")),
    )


def _edge_from_dict(raw: Any, position: int) -> Edge:
    if not isinstance(raw, Mapping):
        raise InvalidGraphError(
            message="Edge entry must be a mapping",
            details={"received": type(raw).__name__},
        )
    source = raw.get("from", raw.get("source"))
    target = raw.get("to", raw.get("target"))
    edge_id = raw.get("id")
    if edge_id is None:
        edge_id = f"edge-{source}-{target}-{position}"
    return Edge(
        id=_hashable(edge_id, "Edge id"),
        source=_hashable(source, "Edge source"),
        target=_hashable(target, "Edge target"),
    )
