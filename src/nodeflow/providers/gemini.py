"""
src/nodeflow/providers/gemini.py

Primary provider: Google Gemini (text) and Imagen (images) through the
google-genai SDK. The credential is process-wide (environment).
"""

from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types

from nodeflow.core.exceptions import ProviderError


class GeminiClient:
    name = "gemini"

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-2.5-flash",
        image_model: str = "imagen-3.0-generate-002",
        client: Any = None,
    ) -> None:
        self.model = model
        self.image_model = image_model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    def generate_text(self, prompt: str, model_hint: Optional[str] = None) -> str:
        try:
            response = self._client.models.generate_content(
                model=model_hint or self.model,
                contents=prompt,
            )
        except Exception as exc:
            raise ProviderError(
                message=f"Gemini API error: {exc}",
                details={"provider": self.name, "exception_class": exc.__class__.__name__},
            ) from exc

        text = getattr(response, "text", None)
        if text is None:
            raise ProviderError(
                message="Gemini API error: empty response",
                details={"provider": self.name},
            )
        return text

    def generate_image(self, prompt: str) -> bytes:
        try:
            response = self._client.models.generate_images(
                model=self.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(number_of_images=1),
            )
        except Exception as exc:
            raise ProviderError(
                message=f"Imagen API error: {exc}",
                details={"provider": self.name, "exception_class": exc.__class__.__name__},
            ) from exc

        images = getattr(response, "generated_images", None) or []
        if not images or images[0].image is None or not images[0].image.image_bytes:
            raise ProviderError(
                message="Imagen API error: no image returned",
                details={"provider": self.name, "model": self.image_model},
            )
        return images[0].image.image_bytes


__all__ = ["GeminiClient"]
