# src/nodeflow/core/engine/runner.py
"""
PipelineRunner do NodeFlow.

Máquina de estados de uma run: Idle → Running → {Success, Error}.

Fluxo:
    1. Pré-condições (antes de Running): snapshot válido e credencial do
       provedor secundário presente quando algum nó `prompt` o escolhe.
       Falha aqui recusa a run: nenhum nó executa e o flag de execução
       nunca é ligado. O chamador obtém a credencial e reexecuta do zero.
    2. Running: contexto novo, credencial primária (só se o grafo precisar),
       ordem topológica, execução estritamente sequencial de cada nó.
    3. A primeira falha de nó aborta a run; artefatos já produzidos ficam
       no contexto, mas não formam um resultado completo.
    4. O flag de execução e o nó corrente são limpos em qualquer desfecho.

Nenhuma exceção atravessa `run`: toda falha vira evento + status `error`
+ `RunResult.error` (NodeFlowErrorPayload serializado).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Union

import httpx

from nodeflow.core.config.defaults import PRIMARY, SECONDARY
from nodeflow.core.config.loader import resolve_config
from nodeflow.core.errors import NodeFlowErrorPayload, engine_execution_error
from nodeflow.core.exceptions import (
    InvalidGraphError,
    NodeExecutionError,
    NodeFlowException,
)
from nodeflow.core.graph.model import Graph, Node
from nodeflow.core.graph.settings import NodeType, OutputKind
from nodeflow.core.pipeline.context import ExecutionContext, utc_now
from nodeflow.core.pipeline.sink import EventSink
from nodeflow.core.pipeline.types import EventType, GeneratedFile, RunStatus
from nodeflow.export.files import ArtifactSink, NullArtifactSink
from nodeflow.export.speech import SilentSpeechSynthesizer, SpeechSynthesizer
from nodeflow.nodes import HandlerRegistry, HandlerServices, default_registry, provider_role
from nodeflow.providers.clients import ClientFactory, ServiceClients
from nodeflow.providers.credentials import (
    CredentialProvider,
    EnvCredentialProvider,
    SessionCredentialProvider,
)

from .aggregation import gather_inputs
from .planner import compute_order

GraphInput = Union[Graph, Mapping[str, Any]]


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma run."""

    run_id: str
    status: RunStatus
    order: List[Hashable] = field(default_factory=list)
    artifacts: Dict[Hashable, str] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)
    files: List[GeneratedFile] = field(default_factory=list)
    warnings: Dict[Hashable, List[str]] = field(default_factory=dict)
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.SUCCESS

    @property
    def needs_credential(self) -> bool:
        return bool(self.error and self.error.get("decision_required"))


def _coerce_graph(graph: GraphInput) -> Graph:
    if isinstance(graph, Graph):
        return graph
    try:
        return Graph.from_snapshot(graph)
    except NodeFlowException:
        raise
    except Exception as exc:
        raise InvalidGraphError(
            message=f"Malformed graph snapshot ({exc.__class__.__name__}: {exc})",
            details={"cause": exc.__class__.__name__},
        ) from exc


class PipelineRunner:
    """Orquestra planner + handlers sobre um ExecutionContext por run."""

    def __init__(
        self,
        *,
        config: Optional[Dict[str, Any]] = None,
        registry: Optional[HandlerRegistry] = None,
        primary_credentials: Optional[CredentialProvider] = None,
        client_factories: Optional[Mapping[str, ClientFactory]] = None,
        event_sink: Optional[EventSink] = None,
        artifact_sink: Optional[ArtifactSink] = None,
        speech: Optional[SpeechSynthesizer] = None,
        http_client: Optional[httpx.Client] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.config: Dict[str, Any] = resolve_config(config)
        self.registry = registry or default_registry()
        self.registry.check_complete()

        env_var = self.config["providers"][PRIMARY].get("api_key_env") or "API_KEY"
        self.primary_credentials = primary_credentials or EnvCredentialProvider(env_var)
        self.client_factories = dict(client_factories or {})
        self.event_sink = event_sink or EventSink()
        self.artifact_sink = artifact_sink or NullArtifactSink()
        self.speech = speech or SilentSpeechSynthesizer()
        self.clock = clock
        self._http = http_client

    # ------------------------------------------------------------------
    # Pré-condições
    # ------------------------------------------------------------------
    def required_providers(self, graph: GraphInput) -> List[str]:
        """Papéis de provedor que o grafo exige (`primary`, `secondary`)."""
        roles: List[str] = []
        for node in _coerce_graph(graph).nodes:
            role: Optional[str] = None
            if node.type is NodeType.PROMPT:
                role = provider_role(self.config, node.settings.provider) or PRIMARY
            elif node.type is NodeType.PROCESS:
                role = PRIMARY
            elif node.type is NodeType.OUTPUT and node.settings.kind is OutputKind.IMAGE:
                role = PRIMARY
            if role is not None and role not in roles:
                roles.append(role)
        return sorted(roles, key=[PRIMARY, SECONDARY].index)

    def missing_credentials(self, graph: GraphInput, secondary_credential: Optional[str] = None) -> List[str]:
        """Credenciais que o chamador precisa obter antes de chamar `run`."""
        missing: List[str] = []
        for role in self.required_providers(graph):
            provider = (
                self.primary_credentials
                if role == PRIMARY
                else SessionCredentialProvider(secondary_credential)
            )
            if not provider.get():
                missing.append(role)
        return missing

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def run(self, graph: GraphInput, *, secondary_credential: Optional[str] = None) -> RunResult:
        ctx = ExecutionContext(
            run_id=uuid.uuid4().hex,
            config=self.config,
            sink=self.event_sink,
            clock=self.clock,
        )
        clients = ServiceClients(
            providers_config=self.config["providers"],
            credentials={
                PRIMARY: self.primary_credentials,
                SECONDARY: SessionCredentialProvider(secondary_credential),
            },
            factories=self.client_factories,
        )

        # credencial secundária ausente: a run nem começa
        try:
            graph = _coerce_graph(graph)
            if SECONDARY in self.required_providers(graph):
                clients.require(SECONDARY)
        except NodeFlowException as exc:
            return self._refuse(ctx, exc)

        http = self._http or httpx.Client(timeout=ctx.cfg("http", "timeout"))
        services = HandlerServices(
            clients=clients,
            http=http,
            artifacts=self.artifact_sink,
            speech=self.speech,
        )

        order: List[Node] = []
        error: Optional[NodeFlowErrorPayload] = None

        ctx.sink.on_running(True)
        ctx.set_status(RunStatus.RUNNING)
        try:
            if PRIMARY in self.required_providers(graph):
                clients.require(PRIMARY)

            order = compute_order(graph)
            ctx.log(message=f"Pipeline execution started. Order: {' -> '.join(n.name for n in order)}")

            for node in order:
                self._execute(graph, node, ctx, services)

            ctx.log(message="Pipeline execution finished.")
            ctx.set_status(RunStatus.SUCCESS)

        except Exception as exc:
            error = self._exception_to_error(exc)
            ctx.log(type=EventType.ERROR, message=f"Pipeline execution aborted: {error.message}")
            ctx.set_status(RunStatus.ERROR)

        finally:
            ctx.set_current_node(None)
            ctx.sink.on_running(False)
            clients.close()
            if self._http is None:
                http.close()

        return self._result(ctx, order, error)

    def _execute(self, graph: Graph, node: Node, ctx: ExecutionContext, services: HandlerServices) -> None:
        ctx.set_current_node(node.id)
        ctx.log(node_id=node.id, message=f"Executing node: {node.name} ({node.type.value})")

        try:
            inputs = gather_inputs(graph, node, ctx.artifacts())
            artifact = self.registry.get(node.type).run(node, inputs, ctx, services)
            if not isinstance(artifact, str):
                raise TypeError(f"{node.type.value} handler must return str, got {type(artifact).__name__}")
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            ctx.log(node_id=node.id, type=EventType.ERROR, message=f"Error at node {node.name}: {message}")
            raise NodeExecutionError(
                message=message,
                details={
                    "node_id": node.id,
                    "node_name": node.name,
                    "node_type": node.type.value,
                    "cause": exc.__class__.__name__,
                    **(exc.details if isinstance(exc, NodeFlowException) else {}),
                },
                hint=getattr(exc, "hint", None),
                decision_required=bool(getattr(exc, "decision_required", False)),
            ) from exc

        ctx.set_artifact(node.id, artifact)

    # ------------------------------------------------------------------
    # Guardrails: exceção -> NodeFlowErrorPayload
    # ------------------------------------------------------------------
    def _exception_to_error(self, exc: Exception) -> NodeFlowErrorPayload:
        if isinstance(exc, NodeFlowException):
            return exc.to_payload()
        return engine_execution_error(
            exc_type=exc.__class__.__name__,
            exc_message=str(exc) or None,
        )

    def _refuse(self, ctx: ExecutionContext, exc: NodeFlowException) -> RunResult:
        prefix = "Invalid workflow" if isinstance(exc, InvalidGraphError) else "Pipeline not started"
        ctx.log(type=EventType.ERROR, message=f"{prefix}: {exc.message}")
        ctx.set_status(RunStatus.ERROR)
        return self._result(ctx, [], exc.to_payload())

    def _result(
        self,
        ctx: ExecutionContext,
        order: List[Node],
        error: Optional[NodeFlowErrorPayload],
    ) -> RunResult:
        return RunResult(
            run_id=ctx.run_id,
            status=ctx.status,
            order=[n.id for n in order],
            artifacts=ctx.artifacts(),
            events=list(ctx.events),
            files=list(ctx.files),
            warnings={k: list(v) for k, v in ctx.warnings.items()},
            error=error.to_dict() if error is not None else None,
        )
