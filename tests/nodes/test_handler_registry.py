# tests/nodes/test_handler_registry.py
"""Testes do registro de handlers por tipo de nó."""

import pytest

from nodeflow.core.graph.settings import NodeType
from nodeflow.nodes import (
    DuplicateHandlerError,
    HandlerRegistry,
    IncompleteRegistryError,
    InputNodeHandler,
    OutputNodeHandler,
)


def test_duplicate_handler_is_rejected():
    registry = HandlerRegistry.of([InputNodeHandler()])

    with pytest.raises(DuplicateHandlerError, match="input"):
        registry.add(InputNodeHandler())


def test_handler_without_node_type_is_rejected():
    class Anonymous:
        def run(self, node, inputs, ctx, services):
            return ""

    with pytest.raises(ValueError):
        HandlerRegistry().add(Anonymous())


def test_missing_types_are_reported():
    registry = HandlerRegistry.of([InputNodeHandler(), OutputNodeHandler()])

    assert registry.missing() == [NodeType.PROMPT, NodeType.PROCESS, NodeType.ITERATION]
    with pytest.raises(IncompleteRegistryError, match="prompt, process, iteration"):
        registry.check_complete()
