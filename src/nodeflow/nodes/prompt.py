"""
Handler do nó `prompt`.

Envia o texto agregado (ou o prompt configurado, sem entradas) ao provedor
escolhido no nó. O nome do provedor é resolvido para um papel
(`primary`/`secondary`) via `prompt.aliases`; nomes desconhecidos caem no
provedor primário com um aviso, nunca com falha.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from nodeflow.core.config.defaults import PRIMARY, SECONDARY
from nodeflow.core.engine.aggregation import NodeInputs
from nodeflow.core.graph.model import Node
from nodeflow.core.graph.settings import NodeType
from nodeflow.core.pipeline.context import ExecutionContext
from nodeflow.core.pipeline.types import EventType

from .base import HandlerServices


def provider_role(config: Dict[str, Any], provider: str) -> Optional[str]:
    """Papel do provedor configurado para `provider`, ou None se não houver alias."""
    aliases = ((config or {}).get("prompt") or {}).get("aliases") or {}
    role = aliases.get(provider)
    return role if role in (PRIMARY, SECONDARY) else None


class PromptNodeHandler:
    node_type = NodeType.PROMPT

    def run(self, node: Node, inputs: NodeInputs, ctx: ExecutionContext, services: HandlerServices) -> str:
        settings = node.settings
        prompt = inputs.text or settings.prompt_text
        clients = services.clients

        ctx.log(
            node_id=node.id,
            type=EventType.DATA,
            message=f'Using prompt with {settings.provider}: "{ctx.preview(prompt)}..."',
        )

        role = provider_role(ctx.config, settings.provider)
        if role is None:
            ctx.add_warning(
                node_id=node.id,
                message=f"Model {settings.provider} not implemented. "
                f"Falling back to {clients.label(PRIMARY)}.",
            )
            role = PRIMARY

        text = clients.get(role).generate_text(prompt, clients.model(role))

        ctx.log(
            node_id=node.id,
            type=EventType.SUCCESS,
            message=f'{clients.label(role)} response: "{ctx.preview(text)}..."',
        )
        return text
