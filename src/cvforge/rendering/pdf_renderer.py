"""Render a context to PDF by printing the HTML page in headless Chromium."""

from __future__ import annotations

import logging

from cvforge.core.models import OutputKind
from cvforge.rendering.base import BaseRenderer
from cvforge.rendering.browser import BrowserSession, run_with_budget
from cvforge.rendering.config import (
    CONTENT_TIMEOUT,
    PAGE_FORMAT,
    PAGE_MARGIN,
    PDF_TIMEOUT,
)
from cvforge.rendering.context import RenderContext
from cvforge.rendering.html_renderer import HtmlRenderer

logger = logging.getLogger(__name__)


class PdfRenderer(BaseRenderer):
    """HTML backend output, rasterized to an A4 PDF.

    Content load and rasterization each have their own budget. When either
    is exceeded, or the browser fails mid-render, the shared browser is torn
    down before the error propagates so the next call starts a fresh one.
    """

    def __init__(
        self,
        session: BrowserSession | None = None,
        html: HtmlRenderer | None = None,
        *,
        content_timeout: float = CONTENT_TIMEOUT,
        pdf_timeout: float = PDF_TIMEOUT,
    ):
        self._session = session or BrowserSession()
        self._html = html or HtmlRenderer()
        self._content_timeout = content_timeout
        self._pdf_timeout = pdf_timeout

    @property
    def output(self) -> OutputKind:
        return OutputKind.PDF

    @property
    def session(self) -> BrowserSession:
        return self._session

    async def render(self, context: RenderContext) -> bytes:
        html = self._html.render_html(context)
        async with self._session.page() as page:
            await run_with_budget(
                "content load",
                self._content_timeout,
                page.set_content(
                    html,
                    wait_until="networkidle",
                    timeout=self._content_timeout * 1000,
                ),
            )
            pdf = await run_with_budget(
                "rasterization",
                self._pdf_timeout,
                page.pdf(
                    format=PAGE_FORMAT,
                    print_background=True,
                    margin=PAGE_MARGIN,
                ),
            )

        logger.info("Rendered PDF for %s (%d bytes)", context.get("name"), len(pdf))
        return pdf

    async def close(self) -> None:
        await self._session.close()
