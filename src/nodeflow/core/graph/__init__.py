# src/nodeflow/core/graph/__init__.py
"""
Modelo de grafo do NodeFlow.

Componentes:
    - settings → NodeType e settings tipados por tipo de nó
    - model    → Node, Edge e Graph (imutáveis, construídos do snapshot do editor)
    - policy   → regras de conexão de arestas aplicadas pelo editor
"""

from .model import Edge, Graph, Node
from .policy import MAX_PROCESS_INPUTS, connect
from .settings import (
    MULTI_INPUT_TYPES,
    InputMode,
    InputSettings,
    IterationSettings,
    NodeSettings,
    NodeType,
    OutputAction,
    OutputKind,
    OutputSettings,
    ProcessMode,
    ProcessSettings,
    PromptSettings,
    parse_settings,
)

__all__ = [
    "Edge",
    "Graph",
    "Node",
    "connect",
    "MAX_PROCESS_INPUTS",
    "MULTI_INPUT_TYPES",
    "InputMode",
    "InputSettings",
    "IterationSettings",
    "NodeSettings",
    "NodeType",
    "OutputAction",
    "OutputKind",
    "OutputSettings",
    "ProcessMode",
    "ProcessSettings",
    "PromptSettings",
    "parse_settings",
]
