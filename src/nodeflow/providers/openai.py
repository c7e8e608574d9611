"""
src/nodeflow/providers/openai.py

Secondary provider: OpenAI chat completions over plain HTTP (httpx).
The bearer credential is supplied per run and lives only in this client.

Request:  POST {base_url}/chat/completions
          {"model": ..., "messages": [{"role": "user", "content": prompt}]}
Response: choices[0].message.content, or an error payload
          {"error": {"message": ...}} with a non-2xx status.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from nodeflow.core.exceptions import ProviderError


class OpenAIChatClient:
    name = "openai"

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gpt-4",
        base_url: str = "https://api.openai.com/v1",
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Closes the connection pool, unless it was injected by the caller."""
        if self._owns_http:
            self._http.close()

    def generate_text(self, prompt: str, model_hint: Optional[str] = None) -> str:
        try:
            response = self._http.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self._api_key}",
                },
                json={
                    "model": model_hint or self.model,
                    "messages": [{"role": "user", "content": prompt}],
                },
            )
        except httpx.RequestError as exc:
            raise ProviderError(
                message=f"OpenAI API error: {exc}",
                details={"provider": self.name, "exception_class": exc.__class__.__name__},
            ) from exc

        if not response.is_success:
            raise ProviderError(
                message=f"OpenAI API error: {response.status_code} - {_error_message(response)}",
                details={"provider": self.name, "status_code": response.status_code},
            )

        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ProviderError(
                message=f"OpenAI API error: malformed response ({type(exc).__name__})",
                details={"provider": self.name, "status_code": response.status_code},
            ) from exc

    def generate_image(self, prompt: str) -> bytes:
        raise ProviderError(
            message="OpenAI provider does not support image generation",
            details={"provider": self.name},
        )


def _error_message(response: httpx.Response) -> str:
    try:
        data: Any = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"].get("message") or "Unknown error"
    return "Unknown error"


__all__ = ["OpenAIChatClient"]
