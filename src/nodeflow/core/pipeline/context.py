# src/nodeflow/core/pipeline/context.py
"""
Contexto de execução de uma run.

Este módulo define o `ExecutionContext`, a estrutura canônica que guarda o
estado mutável de exatamente uma run do PipelineRunner.

O ExecutionContext atua como o único meio permitido de:
    - troca de artefatos entre nós (node id → texto produzido)
    - registro de eventos de log estruturados, em ordem total
    - coleta de arquivos gerados por nós terminais
    - coleta de warnings não fatais por nó
    - publicação do status da run e do nó em execução

Princípios fundamentais:
    - Isolamento por execução (cada run cria um contexto novo)
    - Todo registro é repassado imediatamente ao EventSink
    - Ausência de estado global compartilhado

Invariantes:
    - Artefatos são indexados pelo id do nó que os produziu
    - Eventos sempre incluem `run_id`, `node_id`, `time` e `type`
    - O contexto é mutado apenas pelo fluxo de controle do runner

Limites explícitos:
    - Não executa nós
    - Não decide política de abort
    - Não persiste dados
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Hashable, List, Optional

from .sink import EventSink
from .types import EventType, GeneratedFile, RunStatus


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ExecutionContext:
    """
    Estado mutável de uma run.

    Decisões arquiteturais:
        - Handlers leem configuração e gravam eventos/arquivos apenas via contexto
        - O relógio é injetável para nomes de arquivo e timestamps determinísticos
        - Artefatos de uma run abortada permanecem acessíveis, mas não
          representam um resultado completo
    """

    run_id: str
    config: Dict[str, Any]
    sink: EventSink = field(default_factory=EventSink)
    clock: Callable[[], datetime] = utc_now

    created_at: datetime = field(init=False)
    status: RunStatus = field(default=RunStatus.IDLE, init=False)
    current_node_id: Optional[Hashable] = field(default=None, init=False)

    _artifacts: Dict[Hashable, str] = field(default_factory=dict, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    files: List[GeneratedFile] = field(default_factory=list, init=False)
    warnings: Dict[Hashable, List[str]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.created_at = self.clock()

    # -----------------------------
    # Artifact store
    # -----------------------------
    def set_artifact(self, node_id: Hashable, value: str) -> None:
        self._artifacts[node_id] = value

    def has_artifact(self, node_id: Hashable) -> bool:
        return node_id in self._artifacts

    def get_artifact(self, node_id: Hashable) -> str:
        if node_id not in self._artifacts:
            raise KeyError(node_id)
        return self._artifacts[node_id]

    def artifacts(self) -> Dict[Hashable, str]:
        return dict(self._artifacts)

    # -----------------------------
    # Eventos, warnings e arquivos
    # -----------------------------
    def log(
        self,
        *,
        message: str,
        type: EventType = EventType.INFO,
        node_id: Optional[Hashable] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        event = {
            "run_id": self.run_id,
            "node_id": node_id,
            "type": EventType(type).value,
            "message": message,
            "time": self.clock().isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        self.sink.on_event(event)
        return event

    def add_warning(self, *, node_id: Hashable, message: str) -> None:
        self.warnings.setdefault(node_id, []).append(message)
        self.log(node_id=node_id, type=EventType.INFO, message=message, warning=True)

    def add_file(self, file: GeneratedFile) -> None:
        self.files.append(file)
        self.sink.on_file(file)

    # -----------------------------
    # Estado da run
    # -----------------------------
    def set_status(self, status: RunStatus) -> None:
        self.status = status
        self.sink.on_status(status)

    def set_current_node(self, node_id: Optional[Hashable]) -> None:
        self.current_node_id = node_id
        self.sink.on_current_node(node_id)

    # -----------------------------
    # Configuração
    # -----------------------------
    def cfg(self, *path: str, default: Any = None) -> Any:
        """Lê `config[path[0]][path[1]]...`, devolvendo `default` se faltar algum nível."""
        node: Any = self.config
        for key in path:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return default if node is None else node

    def preview(self, text: str) -> str:
        limit = int(self.cfg("log", "preview_chars", default=100))
        return text[:limit]
