# src/nodeflow/core/config/loader.py
"""
Loader de configuração do NodeFlow.

A configuração efetiva de uma run é resolvida em camadas:
    1. DEFAULT_CONFIG (embutido no pacote, sempre presente)
    2. arquivo de configuração do projeto (YAML ou JSON)
    3. arquivo local de overrides (opcional)

Responsabilidades do módulo:
    - Carregar arquivos YAML/JSON
    - Validar que a raiz é um dicionário
    - Resolver a configuração final via deep-merge determinístico

Limites explícitos:
    - Não lê credenciais (ver `nodeflow.providers.credentials`)
    - Não valida semântica de provedores ou modelos
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from .defaults import DEFAULT_CONFIG
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def resolve_config(override: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Aplica `override` sobre DEFAULT_CONFIG (sem mutar nenhum dos dois)."""
    return deep_merge(DEFAULT_CONFIG, override or {})


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva de uma run.

    Política de resolução:
        - DEFAULT_CONFIG é sempre a base
        - `defaults_path` é obrigatório e sobrescreve DEFAULT_CONFIG
        - `local_path` é opcional; quando o arquivo existe, tem prioridade final

    Args:
        defaults_path (str): Caminho para o arquivo de configuração do projeto.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        ConfigFileNotFoundError: Se `defaults_path` não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    effective = resolve_config(_load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective
