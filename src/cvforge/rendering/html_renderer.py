"""Render a context to a standalone HTML page with Jinja2."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib.resources import files

from jinja2 import (
    Environment,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from cvforge.core.errors import TemplateInjectionError
from cvforge.core.models import OutputKind
from cvforge.rendering.base import BaseRenderer
from cvforge.rendering.config import HTML_TEMPLATE, STYLESHEET
from cvforge.rendering.context import RenderContext

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _environment() -> Environment:
    # The environment caches compiled templates for the process lifetime.
    return Environment(
        loader=PackageLoader("cvforge.rendering", "templates"),
        autoescape=select_autoescape(["html", "j2"]),
        undefined=StrictUndefined,
    )


@lru_cache(maxsize=1)
def load_stylesheet() -> str:
    """Read the packaged stylesheet once."""
    return (files("cvforge.rendering") / "templates" / STYLESHEET).read_text(encoding="utf-8")


class HtmlRenderer(BaseRenderer):
    def __init__(self, template_name: str = HTML_TEMPLATE):
        self._template_name = template_name

    @property
    def output(self) -> OutputKind:
        return OutputKind.HTML

    def render_html(self, context: RenderContext) -> str:
        """Render *context* to an HTML string.

        Raises ``TemplateInjectionError`` when the template references a key
        the context does not carry.
        """
        try:
            template = _environment().get_template(self._template_name)
            html = template.render({**context, "style": load_stylesheet()})
        except TemplateError as exc:
            raise TemplateInjectionError(f"HTML template failed: {exc}") from exc
        logger.debug("Rendered HTML for %s (%d chars)", context.get("name"), len(html))
        return html

    async def render(self, context: RenderContext) -> bytes:
        return self.render_html(context).encode("utf-8")
