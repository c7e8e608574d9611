# src/nodeflow/nodes/registry.py
"""
Registro de handlers por tipo de nó.

O runner só aceita um registro completo: todo `NodeType` precisa de
exatamente um handler antes de qualquer run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from nodeflow.core.graph.settings import NodeType

from .base import NodeHandler


class DuplicateHandlerError(ValueError):
    """Dois handlers registrados para o mesmo tipo de nó."""


class IncompleteRegistryError(ValueError):
    """Há tipos de nó sem handler registrado."""


@dataclass
class HandlerRegistry:
    _handlers: Dict[NodeType, NodeHandler] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def of(cls, handlers: Iterable[NodeHandler]) -> "HandlerRegistry":
        registry = cls()
        for handler in handlers:
            registry.add(handler)
        return registry

    def add(self, handler: NodeHandler) -> None:
        node_type = getattr(handler, "node_type", None)
        if not isinstance(node_type, NodeType):
            raise ValueError("handler.node_type must be a NodeType")

        if node_type in self._handlers:
            raise DuplicateHandlerError(f"Duplicate handler for node type: {node_type.value}")

        self._handlers[node_type] = handler

    def get(self, node_type: NodeType) -> NodeHandler:
        return self._handlers[node_type]

    def missing(self) -> List[NodeType]:
        return [t for t in NodeType if t not in self._handlers]

    def check_complete(self) -> None:
        missing = self.missing()
        if missing:
            raise IncompleteRegistryError(
                "No handler registered for node types: " + ", ".join(t.value for t in missing)
            )
