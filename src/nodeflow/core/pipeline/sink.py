# src/nodeflow/core/pipeline/sink.py
"""
Sink de eventos da run.

O editor, o dashboard e a CLI observam uma run exclusivamente por aqui.
`EventSink` é a implementação padrão (no-op): todo ponto de chamada do
engine notifica o sink incondicionalmente, e quem consome sobrescreve
apenas os callbacks que lhe interessam.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Optional

from .types import GeneratedFile, RunStatus


class EventSink:
    def on_event(self, event: Dict[str, Any]) -> None:
        pass

    def on_status(self, status: RunStatus) -> None:
        pass

    def on_running(self, running: bool) -> None:
        pass

    def on_current_node(self, node_id: Optional[Hashable]) -> None:
        pass

    def on_file(self, file: GeneratedFile) -> None:
        pass


class PrintEventSink(EventSink):
    """Escreve cada evento em uma linha: `[time] TYPE message`."""

    def __init__(self, stream: Any = None) -> None:
        self._stream = stream

    def on_event(self, event: Dict[str, Any]) -> None:
        line = f"[{event['time']}] {str(event['type']).upper():<7} {event['message']}"
        print(line, file=self._stream)

    def on_file(self, file: GeneratedFile) -> None:
        print(f"  generated file: {file.name}", file=self._stream)
