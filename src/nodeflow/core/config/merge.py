# src/nodeflow/core/config/merge.py
"""
Deep-merge de configuração.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - None em qualquer lado → sobrescrita direta (valor "não definido")
    - int/float são tratados como o mesmo tipo numérico
    - demais conflitos de tipo → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


_NUMERIC = (int, float)


def _compatible(base_value: Any, override_value: Any) -> bool:
    if base_value is None or override_value is None:
        return True
    if isinstance(base_value, bool) or isinstance(override_value, bool):
        return type(base_value) is type(override_value)
    if isinstance(base_value, _NUMERIC) and isinstance(override_value, _NUMERIC):
        return True
    return type(base_value) is type(override_value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override`, produzindo um novo dicionário.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: DEFAULT_CONFIG).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se uma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        if not _compatible(base_value, override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
