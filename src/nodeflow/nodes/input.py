"""Handler do nó `input`: texto literal ou corpo de um HTTP GET."""

from __future__ import annotations

import httpx

from nodeflow.core.engine.aggregation import NodeInputs
from nodeflow.core.exceptions import FetchError
from nodeflow.core.graph.model import Node
from nodeflow.core.graph.settings import InputMode, NodeType
from nodeflow.core.pipeline.context import ExecutionContext
from nodeflow.core.pipeline.types import EventType

from .base import HandlerServices


class InputNodeHandler:
    node_type = NodeType.INPUT

    def run(self, node: Node, inputs: NodeInputs, ctx: ExecutionContext, services: HandlerServices) -> str:
        if inputs.edge_count > 0:
            ctx.add_warning(
                node_id=node.id,
                message=f"Warning: Input node '{node.name}' should not have inputs. It will be ignored.",
            )

        settings = node.settings
        if settings.mode is InputMode.URL:
            return self._fetch(node, settings.url, ctx, services)

        ctx.log(node_id=node.id, type=EventType.DATA, message=f"Using provided text. Length: {len(settings.text)}")
        return settings.text

    def _fetch(self, node: Node, url: str, ctx: ExecutionContext, services: HandlerServices) -> str:
        ctx.log(node_id=node.id, type=EventType.DATA, message=f"Fetching content from URL: {url}")
        if not url:
            raise FetchError(message="URL is empty in Input node.", details={"node_id": node.id})

        try:
            response = services.http.get(url, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(
                message=f"Failed to fetch {url}: {exc}",
                details={"url": url, "exception_class": exc.__class__.__name__},
            ) from exc

        if not response.is_success:
            raise FetchError(
                message=f"HTTP error! status: {response.status_code}",
                details={"url": url, "status_code": response.status_code},
            )

        data = response.text
        ctx.log(node_id=node.id, type=EventType.SUCCESS, message=f"Successfully fetched content. Length: {len(data)}")
        return data
