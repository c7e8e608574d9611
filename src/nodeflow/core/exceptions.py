"""
NodeFlow — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do NodeFlow.

Objetivo:
- Permitir que planner, handlers e clientes levantem exceções semânticas
- Facilitar o mapeamento determinístico para NodeFlowErrorPayload
- Evitar ValueError/RuntimeError genéricos nas fronteiras da run

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- O PipelineRunner é o único lugar que converte exceções em payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

from .errors import (
    ENGINE_EXECUTION_ERROR,
    GRAPH_CYCLE_DETECTED,
    GRAPH_INVALID,
    NODE_EXECUTION_ERROR,
    PRECONDITION_MISSING_CREDENTIAL,
    NodeFlowErrorPayload,
)


@dataclass(frozen=True)
class NodeFlowException(Exception):
    """Base class para exceções internas do NodeFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana (vai direto para o log da run)
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    decision_required: bool = False

    error_type: ClassVar[str] = ENGINE_EXECUTION_ERROR

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> NodeFlowErrorPayload:
        return NodeFlowErrorPayload(
            type=self.error_type,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
            decision_required=self.decision_required,
        )


# ---------------------------------------------------------------------------
# Grafo
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GraphError(NodeFlowException):
    """Grafo estruturalmente inválido; a run não chega a executar nós."""

    error_type: ClassVar[str] = GRAPH_INVALID


@dataclass(frozen=True)
class InvalidGraphError(GraphError):
    """Snapshot malformado: id duplicado, tipo de nó desconhecido, campos ausentes."""


@dataclass(frozen=True)
class CycleDetectedError(GraphError):
    """Nós em ciclo ou inalcançáveis a partir de nós com grau de entrada zero."""

    error_type: ClassVar[str] = GRAPH_CYCLE_DETECTED

    @property
    def node_names(self) -> List[str]:
        return list(self.details.get("node_names", []))

    @property
    def node_ids(self) -> List[Any]:
        return list(self.details.get("node_ids", []))


@dataclass(frozen=True)
class EdgePolicyError(GraphError):
    """Conexão recusada pela política de arestas do editor."""


# ---------------------------------------------------------------------------
# Pré-condições
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PreconditionError(NodeFlowException):
    """Requisito externo ausente antes da run começar."""


@dataclass(frozen=True)
class MissingCredentialError(PreconditionError):
    """Credencial obrigatória de um provedor não foi fornecida."""

    error_type: ClassVar[str] = PRECONDITION_MISSING_CREDENTIAL

    @property
    def provider(self) -> Optional[str]:
        return self.details.get("provider")


# ---------------------------------------------------------------------------
# Execução
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeExecutionError(NodeFlowException):
    """Falha de um handler, encapsulada com a identidade do nó."""

    error_type: ClassVar[str] = NODE_EXECUTION_ERROR


@dataclass(frozen=True)
class FetchError(NodeFlowException):
    """Falha ao obter conteúdo de uma URL (rede ou status não-2xx)."""


@dataclass(frozen=True)
class ProviderError(NodeFlowException):
    """Resposta de erro (ou resposta inutilizável) de um provedor generativo."""


__all__ = [
    "NodeFlowException",
    "GraphError",
    "InvalidGraphError",
    "CycleDetectedError",
    "EdgePolicyError",
    "PreconditionError",
    "MissingCredentialError",
    "NodeExecutionError",
    "FetchError",
    "ProviderError",
]
