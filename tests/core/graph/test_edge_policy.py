# tests/core/graph/test_edge_policy.py
"""
Testes da política de conexão do editor (`connect`).

Invariantes validados:
    - process aceita no máximo 3 entradas
    - input/prompt/iteration substituem a entrada anterior
    - output aceita entradas ilimitadas
    - aresta repetida é ignorada
    - o grafo original nunca é alterado
"""

import pytest

from nodeflow.core.exceptions import EdgePolicyError
from nodeflow.core.graph.model import Graph
from nodeflow.core.graph.policy import MAX_PROCESS_INPUTS, connect


@pytest.fixture
def graph(snapshot):
    return Graph.from_snapshot(
        snapshot(
            [
                ("a", "input", "A"),
                ("b", "input", "B"),
                ("c", "input", "C"),
                ("d", "input", "D"),
                ("p", "prompt", "P"),
                ("x", "process", "X"),
                ("o", "output", "O"),
            ]
        )
    )


def test_new_edge_id_and_original_untouched(graph):
    connected = connect(graph, "a", "o")

    assert [e.id for e in connected.edges] == ["edge-a-o"]
    assert graph.edges == ()


def test_process_rejects_fourth_input(graph):
    for source in ("a", "b", "c"):
        graph = connect(graph, source, "x")
    assert len(graph.inbound_edges("x")) == MAX_PROCESS_INPUTS

    with pytest.raises(EdgePolicyError, match="Process block cannot have more than 3 inputs."):
        connect(graph, "d", "x")


def test_single_input_types_replace_existing_edge(graph):
    graph = connect(graph, "a", "p")
    graph = connect(graph, "b", "p")

    assert [(e.source, e.target) for e in graph.edges] == [("b", "p")]


def test_output_accepts_many_inputs(graph):
    for source in ("a", "b", "c", "d", "p"):
        graph = connect(graph, source, "o")

    assert len(graph.inbound_edges("o")) == 5


def test_duplicate_edge_is_ignored(graph):
    once = connect(graph, "a", "o")

    assert connect(once, "a", "o") is once


def test_unknown_nodes_are_rejected(graph):
    with pytest.raises(EdgePolicyError):
        connect(graph, "a", "missing")
