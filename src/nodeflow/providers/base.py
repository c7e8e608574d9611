"""
src/nodeflow/providers/base.py

Capability interface for generative-content providers.

Rules:
- Clients are injected into a run, never owned by a node handler.
- Each call blocks until the provider answers or fails; no timeout is
  enforced here beyond the transport's own.
- Failures surface as ProviderError (or the transport's error wrapped in it).
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ExternalServiceClient(Protocol):
    """Text and image generation, as seen by node handlers."""

    name: str

    def generate_text(self, prompt: str, model_hint: Optional[str] = None) -> str:
        ...

    def generate_image(self, prompt: str) -> bytes:
        ...


__all__ = ["ExternalServiceClient"]
