"""FastAPI app: three POST routes, one per output encoding.

Each request gets its own :class:`CVGenerator`, closed in ``finally`` so
the headless browser never outlives the request.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import UploadFile

from cvforge.core.config import get_render_settings
from cvforge.core.errors import ValidationError
from cvforge.core.models import OutputKind
from cvforge.generation.pipeline import CVGenerator
from cvforge.payload.normalizer import PayloadShape, normalize_payload

logger = logging.getLogger(__name__)

GeneratorFactory = Callable[[], CVGenerator]


async def _read_payload(
    request: Request,
) -> tuple[dict[str, Any], bytes | None, PayloadShape]:
    """Return (fields, uploaded photo bytes, shape) for a JSON or form request."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("body", "Request body is not valid JSON") from None
        if not isinstance(body, dict):
            raise ValidationError("body", "Request body must be a JSON object")
        return body, None, PayloadShape.JSON

    form = await request.form()
    fields: dict[str, Any] = {}
    photo_upload: bytes | None = None
    for key in form.keys():
        values = form.getlist(key)
        uploads = [v for v in values if isinstance(v, UploadFile)]
        if key == "photo" and uploads:
            photo_upload = await uploads[0].read() or None
            continue
        texts = [v for v in values if isinstance(v, str)]
        if texts:
            fields[key] = texts[0] if len(texts) == 1 else texts
    return fields, photo_upload, PayloadShape.FORM


def create_app(generator_factory: GeneratorFactory | None = None) -> FastAPI:
    factory = generator_factory or CVGenerator
    default_lang = get_render_settings().default_lang
    app = FastAPI(title="cvforge", version="0.1.0")

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.info("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})

    async def _generate(request: Request, output: OutputKind) -> Response:
        fields, photo_upload, shape = await _read_payload(request)
        record = normalize_payload(
            fields,
            photo_upload=photo_upload,
            output=output,
            default_lang=default_lang,
            shape=shape,
        )
        generator = factory()
        try:
            body = await generator.generate(record)
        except Exception as exc:
            logger.exception("Error generating %s CV", output.value)
            return JSONResponse(status_code=500, content={"error": str(exc) or repr(exc)})
        finally:
            await generator.close()

        headers = {}
        if output is not OutputKind.HTML:
            headers["Content-Disposition"] = f'attachment; filename="{record.download_name}"'
        return Response(content=body, media_type=output.media_type, headers=headers)

    @app.post("/api/generate")
    async def generate_pdf(request: Request) -> Response:
        return await _generate(request, OutputKind.PDF)

    @app.post("/api/generate/html")
    async def generate_html(request: Request) -> Response:
        return await _generate(request, OutputKind.HTML)

    @app.post("/api/generate/docx")
    async def generate_docx(request: Request) -> Response:
        return await _generate(request, OutputKind.DOCX)

    return app
