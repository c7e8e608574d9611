# tests/core/engine/test_runner_execution.py
"""
Testes de execução do PipelineRunner.

Este módulo valida a máquina de estados de uma run de ponta a ponta
com provedores falsos:

- caminho feliz linear (input → prompt → output)
- fan-in em process com uma única chamada ao provedor primário
- geração de PDF com nome de arquivo determinístico
- abort na primeira falha de nó, sem executar nós seguintes
- ciclo detectado antes de qualquer nó executar
- limpeza incondicional do flag de execução e do nó corrente

Decisões arquiteturais:
    - Nenhuma exceção atravessa `run`; falhas viram eventos + RunResult.error
    - Eventos são observados tanto no RunResult quanto no EventSink

Limites explícitos:
    - Pré-condições de credencial são cobertas em test_runner_preconditions.py
    - Comportamento detalhado de cada handler é coberto em tests/nodes
"""

import re

import httpx
import pytest
import respx

from nodeflow.core.config.defaults import PRIMARY, SECONDARY
from nodeflow.core.engine.runner import PipelineRunner
from nodeflow.core.errors import ENGINE_EXECUTION_ERROR, GRAPH_CYCLE_DETECTED, NODE_EXECUTION_ERROR
from nodeflow.core.graph.settings import NodeType
from nodeflow.core.pipeline.types import RunStatus
from nodeflow.export.files import decode_data_uri
from nodeflow.nodes import (
    HandlerRegistry,
    IncompleteRegistryError,
    InputNodeHandler,
    OutputNodeHandler,
    ProcessNodeHandler,
    PromptNodeHandler,
)
from nodeflow.providers.clients import openai_factory
from nodeflow.providers.credentials import EnvCredentialProvider


def test_linear_pipeline_succeeds(make_runner, snapshot, sink, fake_clients):
    """
    input("hello") → prompt(gemini) → output(console).

    Invariantes:
        - ordem A, B, C
        - o prompt recebe exatamente o artefato do input
        - o output guarda a resposta do provedor
        - status running → success; flag de execução liga e desliga
    """
    runner = make_runner()
    graph = snapshot(
        [
            ("a", "input", "In", {"inputText": "hello"}),
            ("b", "prompt", "Ask"),
            ("c", "output", "Out"),
        ],
        [("a", "b"), ("b", "c")],
    )

    result = runner.run(graph)

    assert result.ok
    assert result.status is RunStatus.SUCCESS
    assert result.order == ["a", "b", "c"]
    assert result.artifacts == {"a": "hello", "b": "primary answer", "c": "primary answer"}
    assert result.error is None

    assert fake_clients[PRIMARY].calls == [{"prompt": "hello", "model": "gemini-2.5-flash"}]

    messages = [e["message"] for e in result.events]
    assert messages[0] == "Pipeline execution started. Order: In -> Ask -> Out"
    assert "Executing node: Ask (prompt)" in messages
    assert "Final Output from Out:" in messages
    assert messages[-1] == "Pipeline execution finished."

    assert sink.events == result.events
    assert sink.statuses == [RunStatus.RUNNING, RunStatus.SUCCESS]
    assert sink.running == [True, False]
    assert sink.current_nodes == ["a", "b", "c", None]
    assert {e["run_id"] for e in result.events} == {result.run_id}


def test_process_fan_in_calls_primary_once(make_runner, snapshot, fake_clients):
    """
    Dois inputs alimentam um process em modo diff.

    Invariantes:
        - uma única chamada ao provedor primário
        - o prompt enumera os textos na ordem das arestas
        - o template é o de diferenças
    """
    runner = make_runner()
    graph = snapshot(
        [
            ("a", "input", "First", {"inputText": "cats are great"}),
            ("b", "input", "Second", {"inputText": "dogs are great"}),
            ("x", "process", "Compare", {"processType": "diff"}),
            ("o", "output", "Out"),
        ],
        [("a", "x"), ("b", "x"), ("x", "o")],
    )

    result = runner.run(graph)

    assert result.ok
    calls = fake_clients[PRIMARY].calls
    assert len(calls) == 1
    prompt = calls[0]["prompt"]
    assert "differences" in prompt
    assert "Text 1:\ncats are great" in prompt
    assert "Text 2:\ndogs are great" in prompt
    assert prompt.index("Text 1:") < prompt.index("Text 2:")
    assert result.artifacts["o"] == "primary answer"


def test_pdf_output_produces_named_file(make_runner, snapshot, tmp_path):
    runner = make_runner()
    graph = snapshot(
        [
            ("a", "input", "In", {"inputText": "Quarterly numbers look fine."}),
            ("o", "output", "Report", {"outputType": "pdf"}),
        ],
        [("a", "o")],
    )

    result = runner.run(graph)

    assert result.ok
    assert len(result.files) == 1
    generated = result.files[0]
    assert re.fullmatch(r"Report_\d+\.pdf", generated.name)

    mime, content = decode_data_uri(generated.url)
    assert mime == "application/pdf"
    assert content.startswith(b"%PDF")
    assert (tmp_path / "downloads" / generated.name).read_bytes() == content


def test_first_failure_aborts_the_run(make_runner, snapshot, sink, fake_clients):
    fake_clients[PRIMARY].error = RuntimeError("quota exceeded")
    runner = make_runner()
    graph = snapshot(
        [
            ("a", "input", "In", {"inputText": "hello"}),
            ("b", "prompt", "Ask"),
            ("c", "output", "Out"),
        ],
        [("a", "b"), ("b", "c")],
    )

    result = runner.run(graph)

    assert result.status is RunStatus.ERROR
    assert "c" not in result.artifacts
    assert result.artifacts == {"a": "hello"}

    messages = [e["message"] for e in result.events]
    assert "Error at node Ask: quota exceeded" in messages
    assert messages[-1] == "Pipeline execution aborted: quota exceeded"
    assert "Executing node: Out (output)" not in messages
    assert result.events[-1]["type"] == "error"

    assert result.error["type"] == NODE_EXECUTION_ERROR
    assert result.error["details"]["node_id"] == "b"
    assert result.error["details"]["cause"] == "RuntimeError"

    assert sink.running == [True, False]
    assert sink.current_nodes[-1] is None


def test_cycle_aborts_before_any_node(make_runner, snapshot):
    runner = make_runner()
    graph = snapshot(
        [("a", "input", "A"), ("b", "prompt", "B"), ("c", "prompt", "C")],
        [("a", "b"), ("b", "c"), ("c", "b")],
    )

    result = runner.run(graph)

    assert result.status is RunStatus.ERROR
    assert result.artifacts == {}
    assert result.error["type"] == GRAPH_CYCLE_DETECTED
    assert result.error["details"]["node_names"] == ["B", "C"]
    messages = [e["message"] for e in result.events]
    assert messages == [
        "Pipeline execution aborted: Cycle detected or nodes are unreachable. "
        "The following nodes will not be executed: B, C"
    ]


def test_unknown_provider_falls_back_to_primary(make_runner, snapshot, fake_clients):
    runner = make_runner()
    graph = snapshot([("p", "prompt", "Ask", {"llm": "deepseek-chat", "promptText": "hi"})])

    result = runner.run(graph)

    assert result.ok
    assert result.warnings == {"p": ["Model deepseek-chat not implemented. Falling back to Gemini."]}
    assert fake_clients[PRIMARY].calls[0]["prompt"] == "hi"


def test_graph_without_generative_nodes_needs_no_credential(make_runner, snapshot, fake_clients):
    runner = make_runner(environ={})
    graph = snapshot([("a", "input", "In", {"inputText": "x"}), ("o", "output", "Out")], [("a", "o")])

    result = runner.run(graph)

    assert result.ok
    assert fake_clients[PRIMARY].calls == []


def test_each_run_gets_fresh_context(make_runner, snapshot):
    runner = make_runner()
    graph = snapshot([("a", "input", "In", {"inputText": "x"})])

    first = runner.run(graph)
    second = runner.run(graph)

    assert first.run_id != second.run_id
    assert len(first.events) == len(second.events)


class _BrokenIteration:
    node_type = NodeType.ITERATION

    def run(self, node, inputs, ctx, services):
        return 42


def test_non_text_artifact_is_a_node_error(make_runner, snapshot):
    registry = HandlerRegistry.of(
        [InputNodeHandler(), PromptNodeHandler(), ProcessNodeHandler(), OutputNodeHandler(), _BrokenIteration()]
    )
    runner = make_runner(registry=registry)

    result = runner.run(snapshot([("it", "iteration", "Loop")]))

    assert result.status is RunStatus.ERROR
    assert result.error["details"]["cause"] == "TypeError"


def test_unexpected_engine_failure_is_wrapped(make_runner, snapshot, monkeypatch):
    import nodeflow.core.engine.runner as runner_module

    def explode(graph):
        raise RuntimeError("planner exploded")

    monkeypatch.setattr(runner_module, "compute_order", explode)
    result = make_runner().run(snapshot([("a", "input", "A")]))

    assert result.status is RunStatus.ERROR
    assert result.error["type"] == ENGINE_EXECUTION_ERROR
    assert result.error["message"] == "planner exploded"


def test_incomplete_registry_is_refused(make_runner):
    with pytest.raises(IncompleteRegistryError):
        make_runner(registry=HandlerRegistry())


@pytest.mark.parametrize(
    "response, status",
    [
        (httpx.Response(200, json={"choices": [{"message": {"content": "hi back"}}]}), RunStatus.SUCCESS),
        (httpx.Response(500, json={"error": {"message": "overloaded"}}), RunStatus.ERROR),
    ],
)
def test_provider_clients_are_closed_when_run_ends(snapshot, response, status):
    """O pool HTTP do cliente secundário é fechado em qualquer desfecho da run."""
    built = []

    def build_openai(api_key, cfg):
        built.append(openai_factory(api_key, cfg))
        return built[-1]

    runner = PipelineRunner(
        primary_credentials=EnvCredentialProvider("API_KEY", environ={}),
        client_factories={SECONDARY: build_openai},
    )
    graph = snapshot([("p", "prompt", "Ask GPT", {"llm": "gpt-4", "promptText": "hi"})])

    with respx.mock:
        respx.post("https://api.openai.com/v1/chat/completions").mock(return_value=response)
        result = runner.run(graph, secondary_credential="sk-test")

    assert result.status is status
    assert len(built) == 1
    assert built[0]._http.is_closed
