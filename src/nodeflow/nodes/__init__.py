# src/nodeflow/nodes/__init__.py
"""
Handlers de nó do NodeFlow.

Um handler por `NodeType`; `default_registry()` devolve o registro
completo usado pelo PipelineRunner quando nenhum outro é injetado.
"""

from .base import HandlerServices, NodeHandler
from .input import InputNodeHandler
from .iteration import IterationNodeHandler
from .output import OutputNodeHandler
from .process import ProcessNodeHandler, build_process_prompt
from .prompt import PromptNodeHandler, provider_role
from .registry import DuplicateHandlerError, HandlerRegistry, IncompleteRegistryError


def default_registry() -> HandlerRegistry:
    return HandlerRegistry.of(
        [
            InputNodeHandler(),
            PromptNodeHandler(),
            ProcessNodeHandler(),
            OutputNodeHandler(),
            IterationNodeHandler(),
        ]
    )


__all__ = [
    "HandlerServices",
    "NodeHandler",
    "HandlerRegistry",
    "DuplicateHandlerError",
    "IncompleteRegistryError",
    "InputNodeHandler",
    "PromptNodeHandler",
    "ProcessNodeHandler",
    "OutputNodeHandler",
    "IterationNodeHandler",
    "build_process_prompt",
    "provider_role",
    "default_registry",
]
