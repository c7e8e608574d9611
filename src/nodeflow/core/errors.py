"""
NodeFlow — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros expostos por uma run do
NodeFlow. Nenhuma exceção atravessa a fronteira do PipelineRunner: toda
falha é convertida em um payload serializável e anexada ao RunResult.

Erros devem ser:
- explícitos
- serializáveis
- acionáveis (com hint de correção)

Taxonomia:
- Graph error        → ciclo, nós inalcançáveis ou snapshot inválido
- Precondition error → credencial obrigatória ausente antes da run
- Node execution     → falha de handler (rede, HTTP, provedor, input vazio fatal)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeFlowErrorPayload:
    """
    Payload canônico de erro do NodeFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    - decision_required: a run só pode prosseguir após ação externa
      (ex.: o usuário fornecer uma credencial e reexecutar do início)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Grafo
GRAPH_INVALID = "GRAPH_INVALID"
GRAPH_CYCLE_DETECTED = "GRAPH_CYCLE_DETECTED"

# Pré-condições
PRECONDITION_MISSING_CREDENTIAL = "PRECONDITION_MISSING_CREDENTIAL"

# Execução
NODE_EXECUTION_ERROR = "NODE_EXECUTION_ERROR"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def engine_execution_error(
    *,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Falha inesperada do engine. Nenhum fallback é aplicado automaticamente.",
) -> NodeFlowErrorPayload:
    return NodeFlowErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=exc_message or "Erro inesperado durante execução",
        details={"exception_class": exc_type},
        hint=hint,
        decision_required=False,
    )


__all__ = [
    "NodeFlowErrorPayload",
    "GRAPH_INVALID",
    "GRAPH_CYCLE_DETECTED",
    "PRECONDITION_MISSING_CREDENTIAL",
    "NODE_EXECUTION_ERROR",
    "ENGINE_EXECUTION_ERROR",
    "engine_execution_error",
]
