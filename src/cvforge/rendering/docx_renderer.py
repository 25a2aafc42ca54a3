"""Render a context to a Word document by field injection with docxtpl."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import lru_cache
from io import BytesIO
from pathlib import Path

from docx.shared import Cm
from docxtpl import DocxTemplate, InlineImage
from jinja2 import Environment, StrictUndefined, TemplateError

from cvforge.core.errors import TemplateInjectionError
from cvforge.core.models import OutputKind
from cvforge.formatting.images import image_descriptor
from cvforge.rendering.base import BaseRenderer
from cvforge.rendering.context import RenderContext
from cvforge.rendering.docx_template import default_template_bytes

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _read_template(path: Path) -> bytes:
    return path.read_bytes()


def _photo_callback(tpl: DocxTemplate) -> Callable[[bytes], InlineImage]:
    """Return ``embed_photo(data)`` for templates: raw bytes → inline image."""

    def embed_photo(data: bytes) -> InlineImage:
        descriptor = image_descriptor(data)
        logger.debug(
            "Embedding %d-byte photo (%gx%g cm)",
            len(descriptor.data), descriptor.width_cm, descriptor.height_cm,
        )
        return InlineImage(
            tpl,
            image_descriptor=BytesIO(descriptor.data),
            width=Cm(descriptor.width_cm),
            height=Cm(descriptor.height_cm),
        )

    return embed_photo


class DocxRenderer(BaseRenderer):
    def __init__(self, template_path: Path | None = None):
        self._template_path = template_path

    @property
    def output(self) -> OutputKind:
        return OutputKind.DOCX

    def _template_bytes(self) -> bytes:
        if self._template_path is None:
            return default_template_bytes()
        try:
            return _read_template(self._template_path)
        except OSError as exc:
            raise TemplateInjectionError(
                f"Cannot load document template {self._template_path}: {exc}"
            ) from exc

    def render_docx(self, context: RenderContext) -> bytes:
        """Inject *context* into the template and return the document bytes.

        Raises ``TemplateInjectionError`` when the template references a field
        or callback the context does not provide.
        """
        # docxtpl mutates the template while rendering, so each call gets its own.
        tpl = DocxTemplate(BytesIO(self._template_bytes()))
        env = Environment(undefined=StrictUndefined, autoescape=True)
        try:
            tpl.render({**context, "embed_photo": _photo_callback(tpl)}, jinja_env=env)
        except TemplateError as exc:
            raise TemplateInjectionError(f"Document template failed: {exc}") from exc

        buffer = BytesIO()
        tpl.save(buffer)
        data = buffer.getvalue()
        logger.info("Rendered DOCX for %s (%d bytes)", context.get("name"), len(data))
        return data

    async def render(self, context: RenderContext) -> bytes:
        return self.render_docx(context)
