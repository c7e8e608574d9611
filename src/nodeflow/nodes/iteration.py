"""Handler do nó `iteration`: repassa a entrada sem alteração."""

from __future__ import annotations

from nodeflow.core.engine.aggregation import NodeInputs
from nodeflow.core.graph.model import Node
from nodeflow.core.graph.settings import NodeType
from nodeflow.core.pipeline.context import ExecutionContext

from .base import HandlerServices


class IterationNodeHandler:
    node_type = NodeType.ITERATION

    def run(self, node: Node, inputs: NodeInputs, ctx: ExecutionContext, services: HandlerServices) -> str:
        ctx.log(node_id=node.id, message="Iteration node (logic not implemented), passing input through.")
        return inputs.text
