# src/nodeflow/core/graph/settings.py
"""
Tipos de nó e settings tipados por tipo.

Cada tipo de nó carrega apenas os campos que lhe dizem respeito
(união rotulada pelo `NodeType`). O snapshot do editor usa chaves
camelCase (`inputType`, `promptText`, `outputType`...); as chaves curtas
(`mode`, `text`, `provider`, `kind`) também são aceitas.

Defaults espelham os valores iniciais do editor quando um campo está ausente.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Union

from nodeflow.core.exceptions import InvalidGraphError


class NodeType(str, Enum):
    INPUT = "input"
    PROMPT = "prompt"
    PROCESS = "process"
    OUTPUT = "output"
    ITERATION = "iteration"


# tipos que agregam várias arestas de entrada (join com "\n")
MULTI_INPUT_TYPES = frozenset({NodeType.PROCESS, NodeType.OUTPUT})


class InputMode(str, Enum):
    TEXT = "text"
    URL = "url"


class ProcessMode(str, Enum):
    MERGE = "merge"
    DIFF = "diff"
    COMMON = "common"


class OutputKind(str, Enum):
    CONSOLE = "console"
    PDF = "pdf"
    IMAGE = "image"
    AUDIO = "audio"


class OutputAction(str, Enum):
    DOWNLOAD = "download"
    OPEN = "open"


DEFAULT_INPUT_TEXT = "Enter text content here..."
DEFAULT_PROMPT_TEXT = "Enter your prompt here..."
DEFAULT_PROVIDER = "gemini-2.5-flash"


@dataclass(frozen=True)
class InputSettings:
    mode: InputMode = InputMode.TEXT
    text: str = DEFAULT_INPUT_TEXT
    url: str = ""


@dataclass(frozen=True)
class PromptSettings:
    provider: str = DEFAULT_PROVIDER
    prompt_text: str = DEFAULT_PROMPT_TEXT


@dataclass(frozen=True)
class ProcessSettings:
    mode: ProcessMode = ProcessMode.MERGE


@dataclass(frozen=True)
class OutputSettings:
    kind: OutputKind = OutputKind.CONSOLE
    action: OutputAction = OutputAction.DOWNLOAD


@dataclass(frozen=True)
class IterationSettings:
    """Campos de laço/condição preservados do editor; sem efeito na execução."""

    loop_type: str = "for"
    initialization: str = "let i = 0"
    condition: str = "i < 10"
    increment: str = "i++"


NodeSettings = Union[InputSettings, PromptSettings, ProcessSettings, OutputSettings, IterationSettings]

SETTINGS_BY_TYPE: Dict[NodeType, type] = {
    NodeType.INPUT: InputSettings,
    NodeType.PROMPT: PromptSettings,
    NodeType.PROCESS: ProcessSettings,
    NodeType.OUTPUT: OutputSettings,
    NodeType.ITERATION: IterationSettings,
}

_MISSING = object()


def _pick(raw: Mapping[str, Any], *keys: str, default: Any) -> Any:
    for key in keys:
        value = raw.get(key, _MISSING)
        if value is not _MISSING:
            return value
    return default


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _enum(enum_cls: type, value: Any, fallback: Enum, aliases: Mapping[str, Enum] | None = None) -> Any:
    if isinstance(value, enum_cls):
        return value
    key = str(value or "").strip()
    if aliases and key in aliases:
        return aliases[key]
    try:
        return enum_cls(key.lower())
    except ValueError:
        return fallback


def parse_settings(node_type: NodeType, raw: Mapping[str, Any] | None) -> NodeSettings:
    """Constrói o variant de settings do `node_type` a partir do payload do editor."""
    raw = raw or {}
    if not isinstance(raw, Mapping):
        raise InvalidGraphError(
            message=f"Settings for node type {node_type.value} must be a mapping",
            details={"type": node_type.value, "received": type(raw).__name__},
        )

    if node_type is NodeType.INPUT:
        return InputSettings(
            mode=_enum(InputMode, _pick(raw, "inputType", "mode", default="text"), InputMode.TEXT),
            text=_text(_pick(raw, "inputText", "text", default=DEFAULT_INPUT_TEXT)),
            url=_text(_pick(raw, "url", default="")).strip(),
        )

    if node_type is NodeType.PROMPT:
        provider = _text(_pick(raw, "llm", "provider", default=DEFAULT_PROVIDER)).strip()
        return PromptSettings(
            provider=provider or DEFAULT_PROVIDER,
            prompt_text=_text(_pick(raw, "promptText", "prompt_text", default=DEFAULT_PROMPT_TEXT)),
        )

    if node_type is NodeType.PROCESS:
        return ProcessSettings(
            mode=_enum(ProcessMode, _pick(raw, "processType", "mode", default="merge"), ProcessMode.MERGE),
        )

    if node_type is NodeType.OUTPUT:
        return OutputSettings(
            kind=_enum(OutputKind, _pick(raw, "outputType", "kind", default="console"), OutputKind.CONSOLE),
            action=_enum(
                OutputAction,
                _pick(raw, "action", default="download"),
                OutputAction.DOWNLOAD,
                aliases={"newTab": OutputAction.OPEN},
            ),
        )

    if node_type is NodeType.ITERATION:
        defaults = IterationSettings()
        return IterationSettings(
            loop_type=_text(_pick(raw, "loopType", "loop_type", default=defaults.loop_type)),
            initialization=_text(_pick(raw, "initialization", default=defaults.initialization)),
            condition=_text(_pick(raw, "condition", default=defaults.condition)),
            increment=_text(_pick(raw, "increment", default=defaults.increment)),
        )

    raise ValueError(f"Unsupported node type: {node_type!r}")


def settings_to_dict(settings: NodeSettings) -> Dict[str, Any]:
    """Serializa settings de volta para as chaves do editor."""
    if isinstance(settings, InputSettings):
        return {"inputType": settings.mode.value, "inputText": settings.text, "url": settings.url}
    if isinstance(settings, PromptSettings):
        return {"llm": settings.provider, "promptText": settings.prompt_text}
    if isinstance(settings, ProcessSettings):
        return {"processType": settings.mode.value}
    if isinstance(settings, OutputSettings):
        action = "newTab" if settings.action is OutputAction.OPEN else settings.action.value
        return {"outputType": settings.kind.value, "action": action}
    if isinstance(settings, IterationSettings):
        return {
            "loopType": settings.loop_type,
            "initialization": settings.initialization,
            "condition": settings.condition,
            "increment": settings.increment,
        }
    raise TypeError(f"Unsupported settings type: {type(settings).__name__}")
