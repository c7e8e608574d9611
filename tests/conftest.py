# tests/conftest.py
"""
Fixtures compartilhados para testes do NodeFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- clientes de provedor falsos (registram chamadas, respondem texto fixo)
- um EventSink que grava tudo o que o engine publica
- um construtor compacto de snapshots de grafo
- um relógio fixo para nomes de arquivo e timestamps determinísticos
- uma fábrica de PipelineRunner já ligada às peças acima

O objetivo destas fixtures é permitir testes do engine, dos handlers e
da CLI sem depender de:
- rede (HTTP é simulado com respx nos testes que precisam)
- variáveis de ambiente reais
- SDKs de provedores generativos

Invariantes:
    - Nenhuma fixture faz chamada de rede
    - Credenciais vêm de mapeamentos explícitos, nunca de os.environ
    - Cada teste recebe instâncias novas (sem estado compartilhado)
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest

from nodeflow.core.config.defaults import PRIMARY, SECONDARY
from nodeflow.core.engine.runner import PipelineRunner
from nodeflow.core.pipeline.sink import EventSink
from nodeflow.export.files import DirectoryArtifactSink
from nodeflow.export.speech import SilentSpeechSynthesizer
from nodeflow.providers.credentials import EnvCredentialProvider

FIXED_MOMENT = datetime(2024, 5, 17, 12, 30, 0, tzinfo=timezone.utc)


class FakeClient:
    """
    Cliente de provedor falso.

    - `responses`: respostas devolvidas em sequência (a última se repete)
    - `error`: exceção levantada em qualquer chamada, se definida
    - `calls` / `image_calls`: prompts recebidos, em ordem
    """

    def __init__(self, name: str, responses: Optional[List[str]] = None, image: bytes = b"\x89PNG fake") -> None:
        self.name = name
        self.responses = list(responses or [f"{name} says hi"])
        self.image = image
        self.error: Optional[Exception] = None
        self.calls: List[Dict[str, Any]] = []
        self.image_calls: List[str] = []

    def generate_text(self, prompt: str, model_hint: Optional[str] = None) -> str:
        self.calls.append({"prompt": prompt, "model": model_hint})
        if self.error is not None:
            raise self.error
        index = min(len(self.calls), len(self.responses)) - 1
        return self.responses[index]

    def generate_image(self, prompt: str) -> bytes:
        self.image_calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.image


class RecordingSink(EventSink):
    def __init__(self) -> None:
        self.events: List[Dict[str, Any]] = []
        self.statuses: List[Any] = []
        self.running: List[bool] = []
        self.current_nodes: List[Any] = []
        self.files: List[Any] = []

    def on_event(self, event):
        self.events.append(event)

    def on_status(self, status):
        self.statuses.append(status)

    def on_running(self, running):
        self.running.append(running)

    def on_current_node(self, node_id):
        self.current_nodes.append(node_id)

    def on_file(self, file):
        self.files.append(file)

    def messages(self) -> List[str]:
        return [e["message"] for e in self.events]


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_MOMENT


@pytest.fixture
def fake_clients() -> Dict[str, FakeClient]:
    return {
        PRIMARY: FakeClient("gemini", ["primary answer"]),
        SECONDARY: FakeClient("openai", ["secondary answer"]),
    }


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def snapshot():
    """
    Construtor compacto de snapshots no formato do editor.

    Uso:
        snapshot(
            [("a", "input", "A", {"inputText": "hi"}), ("b", "output", "B")],
            [("a", "b")],
        )
    """

    def _build(nodes, edges=()):
        built_nodes = []
        for entry in nodes:
            node_id, node_type, name = entry[0], entry[1], entry[2]
            settings = entry[3] if len(entry) > 3 else {}
            built_nodes.append({"id": node_id, "type": node_type, "name": name, "settings": settings})
        built_edges = [{"id": f"e{i}", "from": s, "to": t} for i, (s, t) in enumerate(edges)]
        return {"nodes": built_nodes, "edges": built_edges}

    return _build


@pytest.fixture
def make_runner(fake_clients, sink, fixed_clock, tmp_path):
    """Fábrica de PipelineRunner com fakes; `environ` controla a credencial primária."""

    def _make(*, environ=None, config=None, http_client=None, **kwargs):
        environ = {"API_KEY": "test-key"} if environ is None else environ
        factories = {role: (lambda key, cfg, c=client: c) for role, client in fake_clients.items()}
        return PipelineRunner(
            config=config,
            primary_credentials=EnvCredentialProvider("API_KEY", environ=environ),
            client_factories=factories,
            event_sink=sink,
            artifact_sink=kwargs.pop("artifact_sink", DirectoryArtifactSink(tmp_path / "downloads")),
            speech=kwargs.pop("speech", SilentSpeechSynthesizer()),
            http_client=http_client if http_client is not None else httpx.Client(),
            clock=fixed_clock,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_ctx(sink, fixed_clock):
    """ExecutionContext avulso para testes de handler (config padrão + overrides)."""
    from nodeflow.core.config.loader import resolve_config
    from nodeflow.core.pipeline.context import ExecutionContext

    def _make(config=None):
        return ExecutionContext(run_id="test-run", config=resolve_config(config), sink=sink, clock=fixed_clock)

    return _make


@pytest.fixture
def make_services(fake_clients, tmp_path):
    """HandlerServices com clientes falsos; credenciais controladas por argumento."""
    from nodeflow.core.config.loader import resolve_config
    from nodeflow.nodes.base import HandlerServices
    from nodeflow.providers.clients import ServiceClients
    from nodeflow.providers.credentials import SessionCredentialProvider

    def _make(*, primary_key="test-key", secondary_key=None, http=None, artifacts=None, speech=None):
        clients = ServiceClients(
            providers_config=resolve_config()["providers"],
            credentials={
                PRIMARY: SessionCredentialProvider(primary_key),
                SECONDARY: SessionCredentialProvider(secondary_key),
            },
            factories={role: (lambda key, cfg, c=client: c) for role, client in fake_clients.items()},
        )
        return HandlerServices(
            clients=clients,
            http=http if http is not None else httpx.Client(),
            artifacts=artifacts if artifacts is not None else DirectoryArtifactSink(tmp_path / "downloads"),
            speech=speech if speech is not None else SilentSpeechSynthesizer(),
        )

    return _make
