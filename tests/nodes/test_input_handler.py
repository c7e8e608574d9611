# tests/nodes/test_input_handler.py
"""
Testes do handler `input`.

Cobre:
- modo texto (artefato = texto configurado, inclusive vazio)
- aviso quando o nó recebe arestas de entrada
- modo URL com HTTP simulado via respx: sucesso, status não-2xx,
  falha de rede e URL vazia
"""

import httpx
import pytest
import respx

from nodeflow.core.engine.aggregation import NodeInputs
from nodeflow.core.exceptions import FetchError
from nodeflow.core.graph.model import Node
from nodeflow.core.graph.settings import InputMode, InputSettings, NodeType
from nodeflow.nodes.input import InputNodeHandler


def _node(**settings):
    return Node(id="in", type=NodeType.INPUT, name="Source", settings=InputSettings(**settings))


def test_text_mode_returns_configured_text(make_ctx, make_services, sink):
    ctx = make_ctx()

    out = InputNodeHandler().run(_node(text="hello"), NodeInputs(), ctx, make_services())

    assert out == "hello"
    assert sink.messages() == ["Using provided text. Length: 5"]


def test_empty_text_is_a_valid_artifact(make_ctx, make_services):
    assert InputNodeHandler().run(_node(text=""), NodeInputs(), make_ctx(), make_services()) == ""


def test_inbound_edges_produce_warning(make_ctx, make_services):
    ctx = make_ctx()

    out = InputNodeHandler().run(
        _node(text="kept"), NodeInputs(texts=("ignored",), edge_count=1), ctx, make_services()
    )

    assert out == "kept"
    assert ctx.warnings == {
        "in": ["Warning: Input node 'Source' should not have inputs. It will be ignored."]
    }


def test_url_mode_fetches_body(make_ctx, make_services, sink):
    ctx = make_ctx()
    node = _node(mode=InputMode.URL, url="https://example.com/article")

    with respx.mock:
        route = respx.get("https://example.com/article").mock(
            return_value=httpx.Response(200, text="<html>news</html>")
        )
        out = InputNodeHandler().run(node, NodeInputs(), ctx, make_services())

    assert route.called
    assert out == "<html>news</html>"
    assert sink.messages() == [
        "Fetching content from URL: https://example.com/article",
        "Successfully fetched content. Length: 17",
    ]


def test_url_mode_non_2xx_fails(make_ctx, make_services):
    node = _node(mode=InputMode.URL, url="https://example.com/missing")

    with respx.mock:
        respx.get("https://example.com/missing").mock(return_value=httpx.Response(404))
        with pytest.raises(FetchError, match="HTTP error! status: 404") as excinfo:
            InputNodeHandler().run(node, NodeInputs(), make_ctx(), make_services())

    assert excinfo.value.details["status_code"] == 404


def test_url_mode_network_failure(make_ctx, make_services):
    node = _node(mode=InputMode.URL, url="https://unreachable.example/feed")

    with respx.mock:
        respx.get("https://unreachable.example/feed").mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(FetchError) as excinfo:
            InputNodeHandler().run(node, NodeInputs(), make_ctx(), make_services())

    assert excinfo.value.details["exception_class"] == "ConnectError"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_empty_url_fails_without_request(make_ctx, make_services):
    with pytest.raises(FetchError, match="URL is empty in Input node."):
        InputNodeHandler().run(_node(mode=InputMode.URL, url=""), NodeInputs(), make_ctx(), make_services())
