"""
src/nodeflow/providers/clients.py

Per-run holder of provider clients.

- Credentials are resolved at most once per run.
- Clients are built lazily, on the first handler that needs them, so a
  workflow with no generative node never touches any credential.
- Factories are injectable: `(api_key, provider_cfg) -> ExternalServiceClient`.
- Clients built during a run are closed when the run ends.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from nodeflow.core.config.defaults import PRIMARY, SECONDARY
from nodeflow.core.exceptions import MissingCredentialError

from .base import ExternalServiceClient
from .credentials import CredentialProvider

ClientFactory = Callable[[str, Dict[str, Any]], ExternalServiceClient]

_UNRESOLVED = object()


def gemini_factory(api_key: str, cfg: Dict[str, Any]) -> ExternalServiceClient:
    from .gemini import GeminiClient

    return GeminiClient(
        api_key=api_key,
        model=cfg.get("model") or "gemini-2.5-flash",
        image_model=cfg.get("image_model") or "imagen-3.0-generate-002",
    )


def openai_factory(api_key: str, cfg: Dict[str, Any]) -> ExternalServiceClient:
    from .openai import OpenAIChatClient

    return OpenAIChatClient(
        api_key=api_key,
        model=cfg.get("model") or "gpt-4",
        base_url=cfg.get("base_url") or "https://api.openai.com/v1",
        timeout=cfg.get("timeout"),
    )


DEFAULT_FACTORIES: Dict[str, ClientFactory] = {
    PRIMARY: gemini_factory,
    SECONDARY: openai_factory,
}


class ServiceClients:
    def __init__(
        self,
        *,
        providers_config: Mapping[str, Dict[str, Any]],
        credentials: Mapping[str, CredentialProvider],
        factories: Optional[Mapping[str, ClientFactory]] = None,
    ) -> None:
        self._config = dict(providers_config)
        self._credentials = dict(credentials)
        self._factories = dict(DEFAULT_FACTORIES)
        self._factories.update(factories or {})
        self._resolved: Dict[str, Any] = {}
        self._clients: Dict[str, ExternalServiceClient] = {}

    def label(self, role: str) -> str:
        return str(self._config.get(role, {}).get("label") or role)

    def model(self, role: str) -> Optional[str]:
        return self._config.get(role, {}).get("model")

    def credential(self, role: str) -> Optional[str]:
        cached = self._resolved.get(role, _UNRESOLVED)
        if cached is _UNRESOLVED:
            provider = self._credentials.get(role)
            cached = provider.get() if provider is not None else None
            self._resolved[role] = cached
        return cached

    def has_credential(self, role: str) -> bool:
        return bool(self.credential(role))

    def require(self, role: str) -> str:
        api_key = self.credential(role)
        if not api_key:
            raise MissingCredentialError(
                message=self._missing_message(role),
                details={"provider": role},
                hint="Forneça a credencial do provedor e reexecute o workflow desde o início.",
                decision_required=True,
            )
        return api_key

    def get(self, role: str) -> ExternalServiceClient:
        client = self._clients.get(role)
        if client is None:
            api_key = self.require(role)
            client = self._factories[role](api_key, dict(self._config.get(role, {})))
            self._clients[role] = client
        return client

    def primary(self) -> ExternalServiceClient:
        return self.get(PRIMARY)

    def secondary(self) -> ExternalServiceClient:
        return self.get(SECONDARY)

    def built(self) -> List[str]:
        return list(self._clients)

    def close(self) -> None:
        """Releases every client built in this run (those exposing `close`)."""
        clients, self._clients = self._clients, {}
        for client in clients.values():
            close = getattr(client, "close", None)
            if callable(close):
                close()

    def _missing_message(self, role: str) -> str:
        if role == PRIMARY:
            env = self._config.get(PRIMARY, {}).get("api_key_env") or "API_KEY"
            return (
                f"A node requiring the {self.label(PRIMARY)} API is present, "
                f"but the {env} environment variable is not set."
            )
        return f"{self.label(role)} API key is missing."
