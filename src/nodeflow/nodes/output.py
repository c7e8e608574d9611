"""
Handler do nó `output` (sink terminal).

Comportamento por `kind`:
    - console → registra o texto como evento `data`
    - pdf     → renderiza o texto em PDF e registra o arquivo
    - image   → usa o texto como prompt do gerador de imagens primário
    - audio   → dispara a fala local e registra o texto-fonte como arquivo
                (o áudio em si não vira artefato)

Para pdf/image o `action` decide se o arquivo é salvo (download) ou apenas
oferecido para visualização (open); para audio, apenas download entrega o
arquivo de texto. Entrada vazia é registrada como erro, sem abortar o nó.
"""

from __future__ import annotations

from nodeflow.core.engine.aggregation import NodeInputs
from nodeflow.core.graph.model import Node
from nodeflow.core.graph.settings import NodeType, OutputAction, OutputKind
from nodeflow.core.pipeline.context import ExecutionContext
from nodeflow.core.pipeline.types import EventType
from nodeflow.export.files import file_name, make_file
from nodeflow.export.report_pdf import render_text_pdf

from .base import HandlerServices


class OutputNodeHandler:
    node_type = NodeType.OUTPUT

    def run(self, node: Node, inputs: NodeInputs, ctx: ExecutionContext, services: HandlerServices) -> str:
        ctx.log(node_id=node.id, type=EventType.SUCCESS, message=f"Final Output from {node.name}:")

        text = inputs.text
        if not text:
            ctx.log(node_id=node.id, type=EventType.ERROR, message="No input data received.")
            return ""

        kind = node.settings.kind
        action = node.settings.action

        if kind is OutputKind.PDF:
            self._pdf(node, text, action, ctx, services)
        elif kind is OutputKind.IMAGE:
            self._image(node, text, action, ctx, services)
        elif kind is OutputKind.AUDIO:
            self._audio(node, text, action, ctx, services)
        else:
            ctx.log(node_id=node.id, type=EventType.DATA, message=text)

        return text

    def _pdf(
        self, node: Node, text: str, action: OutputAction, ctx: ExecutionContext, services: HandlerServices
    ) -> None:
        ctx.log(node_id=node.id, type=EventType.DATA, message="Generating PDF with content...")
        engine = ctx.cfg("output", "pdf_engine", default="reportlab")
        content = render_text_pdf(text, engine_name=engine)
        name = file_name(node.name, ctx.clock(), "pdf")
        ctx.add_file(make_file(name, content, "application/pdf"))
        services.artifacts.deliver(name, content, "application/pdf", action)

    def _image(
        self, node: Node, text: str, action: OutputAction, ctx: ExecutionContext, services: HandlerServices
    ) -> None:
        ctx.log(node_id=node.id, type=EventType.DATA, message="Generating Image from prompt...")
        content = services.clients.primary().generate_image(text)
        name = file_name(node.name, ctx.clock(), "png")
        ctx.add_file(make_file(name, content, "image/png"))
        services.artifacts.deliver(name, content, "image/png", action)

    def _audio(
        self, node: Node, text: str, action: OutputAction, ctx: ExecutionContext, services: HandlerServices
    ) -> None:
        ctx.log(node_id=node.id, type=EventType.DATA, message="Generating Audio from text...")
        services.speech.speak(text)
        content = text.encode("utf-8")
        name = file_name(node.name, ctx.clock(), "txt")
        ctx.add_file(make_file(name, content, "text/plain", display_name=f"{name} (text content)"))
        if action is OutputAction.DOWNLOAD:
            services.artifacts.deliver(name, content, "text/plain", action)
