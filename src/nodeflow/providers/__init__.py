"""
src/nodeflow/providers

Generative-content providers and credential sources.

- base        -> ExternalServiceClient protocol
- credentials -> environment / session credential providers
- gemini      -> primary provider (google-genai)
- openai      -> secondary provider (httpx chat completions)
- clients     -> lazy per-run client holder
"""

from .base import ExternalServiceClient
from .clients import DEFAULT_FACTORIES, ClientFactory, ServiceClients
from .credentials import CredentialProvider, EnvCredentialProvider, SessionCredentialProvider

__all__ = [
    "ExternalServiceClient",
    "ClientFactory",
    "DEFAULT_FACTORIES",
    "ServiceClients",
    "CredentialProvider",
    "EnvCredentialProvider",
    "SessionCredentialProvider",
]
