# src/nodeflow/core/config/__init__.py
"""
Camada de configuração do NodeFlow.

Responsabilidades do pacote:
    - Configuração embutida (DEFAULT_CONFIG)
    - Carregamento de arquivos YAML/JSON (projeto + overrides locais)
    - Resolução da configuração final via deep-merge determinístico

Princípios fundamentais:
    - Configuração não contém segredos: credenciais vêm de provedores
      de credencial injetados no runner
    - A mesma entrada sempre produz a mesma configuração final
"""

from .defaults import DEFAULT_CONFIG, PRIMARY, SECONDARY
from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_config, resolve_config
from .merge import deep_merge

__all__ = [
    "DEFAULT_CONFIG",
    "PRIMARY",
    "SECONDARY",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "load_config",
    "resolve_config",
    "deep_merge",
]
