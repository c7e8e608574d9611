"""
src/nodeflow/export/speech.py

Local text-to-speech side effect for `output` nodes of kind `audio`.

The synthesized audio is not captured as an artifact; only the source text
is registered as a generated file by the output handler. Nothing here plays
sound: real synthesis is injected by the host application.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class SpeechSynthesizer(Protocol):
    def speak(self, text: str) -> None:
        ...


class SilentSpeechSynthesizer:
    """Default synthesizer for headless runs: records utterances, plays nothing."""

    def __init__(self) -> None:
        self.utterances: List[str] = []

    def speak(self, text: str) -> None:
        self.utterances.append(text)


__all__ = ["SpeechSynthesizer", "SilentSpeechSynthesizer"]
