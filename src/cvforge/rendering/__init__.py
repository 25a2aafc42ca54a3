"""Rendering: project a render context into HTML, PDF or DOCX."""

from cvforge.rendering.context import RenderContext, build_context
from cvforge.rendering.docx_renderer import DocxRenderer
from cvforge.rendering.html_renderer import HtmlRenderer
from cvforge.rendering.pdf_renderer import PdfRenderer

__all__ = [
    "DocxRenderer",
    "HtmlRenderer",
    "PdfRenderer",
    "RenderContext",
    "build_context",
]
