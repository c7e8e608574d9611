# src/nodeflow/core/pipeline/types.py
"""
Tipos canônicos de uma run do NodeFlow.

Componentes principais:
    - RunStatus     → estados da run (idle, running, success, error)
    - EventType     → classificação de eventos de log (info, data, success, error)
    - GeneratedFile → descritor de arquivo gerado `{name, url}`

Invariantes:
    - Enums possuem valores textuais canônicos (serializáveis em JSON)
    - GeneratedFile é imutável
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict


class RunStatus(str, Enum):
    """
    Estados de uma run.

    Transições válidas:
        IDLE → RUNNING → {SUCCESS, ERROR}
        IDLE → ERROR   (pré-condição ou grafo inválido: a run não inicia)
    """

    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class EventType(str, Enum):
    INFO = "info"
    DATA = "data"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class GeneratedFile:
    """Arquivo produzido por um nó terminal; `url` é um data URI com o conteúdo."""

    name: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
