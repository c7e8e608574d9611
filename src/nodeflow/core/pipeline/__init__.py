# src/nodeflow/core/pipeline/__init__.py
"""
# Pipeline Core — NodeFlow

Estruturas de estado e observação de uma run.

## Componentes

- **types**
  - `RunStatus`: estados da run
  - `EventType`: classificação de eventos de log
  - `GeneratedFile`: descritor `{name, url}` de arquivo gerado

- **sink**
  - `EventSink`: callbacks de observação com implementação no-op

- **context**
  - `ExecutionContext`: artefatos, eventos, arquivos e status de uma run

## Invariantes

- Cada run possui um ExecutionContext próprio, descartado ao final
- Eventos formam uma sequência totalmente ordenada
"""

from .context import ExecutionContext
from .sink import EventSink, PrintEventSink
from .types import EventType, GeneratedFile, RunStatus

__all__ = [
    "ExecutionContext",
    "EventSink",
    "PrintEventSink",
    "EventType",
    "GeneratedFile",
    "RunStatus",
]
