# src/nodeflow/nodes/base.py
"""
Contrato canônico de um handler de nó.

Um handler recebe o nó, as entradas já agregadas, o ExecutionContext da
run e os serviços injetados, e devolve o artefato (texto) do nó.

Princípios fundamentais:
    - Handlers não conhecem o planner nem a ordem de execução
    - Handlers não guardam estado entre runs
    - Falhas são sinalizadas por exceção; o runner decide o abort
    - Eventos são emitidos apenas via `ctx.log`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx

from nodeflow.core.engine.aggregation import NodeInputs
from nodeflow.core.graph.model import Node
from nodeflow.core.graph.settings import NodeType
from nodeflow.core.pipeline.context import ExecutionContext
from nodeflow.export.files import ArtifactSink, NullArtifactSink
from nodeflow.export.speech import SilentSpeechSynthesizer, SpeechSynthesizer
from nodeflow.providers.clients import ServiceClients


@dataclass
class HandlerServices:
    """Colaboradores externos disponíveis aos handlers durante uma run."""

    clients: ServiceClients
    http: httpx.Client
    artifacts: ArtifactSink = field(default_factory=NullArtifactSink)
    speech: SpeechSynthesizer = field(default_factory=SilentSpeechSynthesizer)


@runtime_checkable
class NodeHandler(Protocol):
    """
    Contrato mínimo de um handler.

    Atributos obrigatórios:
        - node_type: tipo de nó atendido

    Métodos obrigatórios:
        - run(node, inputs, ctx, services) -> str
    """

    node_type: NodeType

    def run(
        self,
        node: Node,
        inputs: NodeInputs,
        ctx: ExecutionContext,
        services: HandlerServices,
    ) -> str:
        ...
