"""Render pipeline: one entry point per output encoding.

Normalized record → context → backend. :class:`CVGenerator` owns the three
backends and, through the PDF backend, the headless browser. Call
:meth:`CVGenerator.close` (or use ``async with``) when done so the browser
never outlives its owner.
"""

from __future__ import annotations

import logging
from types import TracebackType

from cvforge.core.config import RenderSettings, get_render_settings
from cvforge.core.models import OutputKind, ResumeRecord
from cvforge.formatting.locales import resolve_locale
from cvforge.rendering.base import BaseRenderer
from cvforge.rendering.browser import BrowserSession, Launcher, chromium_launcher
from cvforge.rendering.context import RenderContext, build_context
from cvforge.rendering.docx_renderer import DocxRenderer
from cvforge.rendering.html_renderer import HtmlRenderer
from cvforge.rendering.pdf_renderer import PdfRenderer

logger = logging.getLogger(__name__)


class CVGenerator:
    def __init__(
        self,
        settings: RenderSettings | None = None,
        *,
        _launcher: Launcher | None = None,
    ):
        """
        Args:
            settings: Budgets and template paths. Defaults to the environment.
            _launcher: Inject a fake browser launcher for tests.
        """
        self.settings = settings or get_render_settings()
        session = BrowserSession(
            _launcher or chromium_launcher(headless=self.settings.headless),
            launch_timeout=self.settings.launch_timeout,
        )
        self.html = HtmlRenderer()
        self.pdf = PdfRenderer(
            session,
            self.html,
            content_timeout=self.settings.content_timeout,
            pdf_timeout=self.settings.pdf_timeout,
        )
        self.docx = DocxRenderer(self.settings.docx_template)
        self._backends: dict[OutputKind, BaseRenderer] = {
            r.output: r for r in (self.html, self.pdf, self.docx)
        }

    @staticmethod
    def context_for(record: ResumeRecord) -> RenderContext:
        return build_context(record, resolve_locale(record.lang))

    async def generate_html(self, record: ResumeRecord) -> str:
        return self.html.render_html(self.context_for(record))

    async def generate_pdf(self, record: ResumeRecord) -> bytes:
        return await self.pdf.render(self.context_for(record))

    async def generate_docx(self, record: ResumeRecord) -> bytes:
        return await self.docx.render(self.context_for(record))

    async def generate(self, record: ResumeRecord) -> bytes:
        """Render *record* with the backend matching ``record.output``."""
        backend = self._backends[record.output]
        logger.debug("Generating %s for %s", record.output.value, record.name)
        return await backend.render(self.context_for(record))

    async def close(self) -> None:
        """Release every backend. Failures are logged, never raised."""
        for backend in self._backends.values():
            try:
                await backend.close()
            except Exception:
                logger.exception("Failed to close %s backend", backend.output.value)

    async def __aenter__(self) -> CVGenerator:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
