"""
src/nodeflow/export/report_pdf.py

Text to PDF rendering (engine-pluggable) for `output` nodes of kind `pdf`.

Rules:
- No access to the run context; input is plain text, output is PDF bytes.
- Engines are looked up by name in an explicit registry.
- Deterministic layout for a fixed input + engine + options.
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import Any, Dict
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer


class PdfEngine(ABC):
    """Abstract base class for text to PDF engines."""

    name: str

    @abstractmethod
    def render(self, text: str, **opts: Any) -> bytes:
        """Render plain text into a PDF document."""
        raise NotImplementedError


# -----------------------------------------------------------------------------
# Engine registry
# -----------------------------------------------------------------------------

ENGINE_REGISTRY: Dict[str, PdfEngine] = {}


def register_engine(engine: PdfEngine) -> None:
    if not engine or not getattr(engine, "name", None):
        raise ValueError("Invalid PdfEngine: missing name")
    ENGINE_REGISTRY[engine.name] = engine


def get_engine(name: str) -> PdfEngine:
    try:
        return ENGINE_REGISTRY[name]
    except KeyError:
        raise KeyError(f"PDF engine not registered: {name}")


def render_text_pdf(text: str, *, engine_name: str = "reportlab", **opts: Any) -> bytes:
    pdf = get_engine(engine_name).render(text, **opts)
    if not pdf:
        raise RuntimeError("PDF generation failed: empty document")
    return pdf


# -----------------------------------------------------------------------------
# reportlab engine
# -----------------------------------------------------------------------------

class ReportLabEngine(PdfEngine):
    name = "reportlab"

    def render(self, text: str, **opts: Any) -> bytes:
        styles = getSampleStyleSheet()
        body = styles["Normal"]
        story = []

        title = opts.get("title")
        if title:
            story.append(Paragraph(escape(str(title)), styles["Heading1"]))

        for line in text.splitlines():
            if not line.strip():
                story.append(Spacer(1, 8))
                continue
            # leading spaces are dropped by Paragraph; keep indentation visible
            indent = len(line) - len(line.lstrip(" "))
            story.append(Paragraph("&nbsp;" * indent + escape(line.strip()), body))

        if not story:
            story.append(Spacer(1, 8))

        margin = int(opts.get("margin", 36))
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=margin,
            leftMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=str(title or ""),
        )
        doc.build(story)
        return buffer.getvalue()


register_engine(ReportLabEngine())


__all__ = [
    "PdfEngine",
    "ENGINE_REGISTRY",
    "register_engine",
    "get_engine",
    "render_text_pdf",
    "ReportLabEngine",
]
