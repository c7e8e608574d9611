"""
Handler do nó `process`.

Combina as entradas individuais em um único texto com uma chamada ao
provedor primário, usando um de três templates:
    - merge  → documento único e coerente
    - diff   → pontos de contraste entre os textos
    - common → temas e informações compartilhadas

Sem entradas, produz artefato vazio sem chamar nenhum provedor.
"""

from __future__ import annotations

from typing import Sequence

from nodeflow.core.config.defaults import PRIMARY
from nodeflow.core.engine.aggregation import NodeInputs
from nodeflow.core.graph.model import Node
from nodeflow.core.graph.settings import NodeType, ProcessMode
from nodeflow.core.pipeline.context import ExecutionContext
from nodeflow.core.pipeline.types import EventType

from .base import HandlerServices


def _numbered(texts: Sequence[str], label: str) -> str:
    return "\n\n".join(f"{label} {i}:\n{text}" for i, text in enumerate(texts, start=1))


def build_process_prompt(mode: ProcessMode, texts: Sequence[str]) -> str:
    count = len(texts)
    if mode is ProcessMode.DIFF:
        return (
            f"Analyze the following {count} pieces of text and provide a concise, bullet-point "
            "summary of the key contrasting points and differences between them.\n\n"
            "--- Texts for Comparison ---\n\n" + _numbered(texts, "Text")
        )
    if mode is ProcessMode.COMMON:
        return (
            f"Analyze the following {count} pieces of text and generate a concise, bullet-point "
            "summary of the shared themes, overlapping information, and commonalities found "
            "across all of them.\n\n"
            "--- Texts for Analysis ---\n\n" + _numbered(texts, "Text")
        )
    return (
        f"Intelligently combine the following {count} pieces of text into a single, coherent, "
        "and well-structured document. Maintain the core information and logical flow, "
        "avoiding redundancy where possible.\n\n"
        "--- Texts to Merge ---\n\n" + _numbered(texts, "Piece")
    )


class ProcessNodeHandler:
    node_type = NodeType.PROCESS

    def run(self, node: Node, inputs: NodeInputs, ctx: ExecutionContext, services: HandlerServices) -> str:
        if not inputs:
            ctx.log(node_id=node.id, message=f"Process node {node.name} has no input. Skipping.")
            return ""

        mode = node.settings.mode
        ctx.log(
            node_id=node.id,
            type=EventType.DATA,
            message=f"Processing {len(inputs.texts)} inputs with mode: {mode.value}",
        )

        clients = services.clients
        result = clients.primary().generate_text(
            build_process_prompt(mode, inputs.texts),
            clients.model(PRIMARY),
        )

        ctx.log(node_id=node.id, type=EventType.SUCCESS, message=f'Process result: "{ctx.preview(result)}..."')
        return result
