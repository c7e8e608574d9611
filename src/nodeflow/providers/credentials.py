"""
src/nodeflow/providers/credentials.py

Credential-provider capabilities.

Two sources exist:
- environment (process-wide secret, read once per run)
- session (value typed by the user for one run, never persisted)

The runner resolves each provider at most once per run.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class CredentialProvider(Protocol):
    def get(self) -> Optional[str]:
        ...


class EnvCredentialProvider:
    """Reads a secret from an environment variable."""

    def __init__(self, variable: str, environ: Optional[Mapping[str, str]] = None) -> None:
        self.variable = variable
        self._environ = environ

    def get(self) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        value = (environ.get(self.variable) or "").strip()
        return value or None

    def __repr__(self) -> str:
        return f"EnvCredentialProvider(variable={self.variable!r})"


class SessionCredentialProvider:
    """Holds a secret supplied for a single run."""

    def __init__(self, value: Optional[str] = None) -> None:
        self._value = (value or "").strip() or None

    def get(self) -> Optional[str]:
        return self._value

    def __repr__(self) -> str:
        state = "set" if self._value else "empty"
        return f"SessionCredentialProvider({state})"


__all__ = ["CredentialProvider", "EnvCredentialProvider", "SessionCredentialProvider"]
