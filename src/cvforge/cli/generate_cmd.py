"""Generate command: render a CV from local files."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from cvforge.cli import cli_error, console
from cvforge.core.config import RenderSettings, get_render_settings
from cvforge.core.errors import CVForgeError
from cvforge.core.models import OutputKind, ResumeRecord
from cvforge.generation.pipeline import CVGenerator
from cvforge.payload.normalizer import PayloadShape, normalize_payload

logger = logging.getLogger(__name__)


def _split_skills(skills: str | None) -> list[str]:
    if not skills:
        return []
    return [s.strip() for s in skills.split(",") if s.strip()]


async def _render(record: ResumeRecord, settings: RenderSettings) -> bytes:
    async with CVGenerator(settings) as generator:
        return await generator.generate(record)


def generate_command(
    name: str = typer.Option(..., "--name", "-n", help="Full name."),
    photo: Path = typer.Option(
        ..., "--photo", "-p", exists=True, dir_okay=False, help="Path to photo file (jpg/png).",
    ),
    summary: str = typer.Option(..., "--summary", "-s", help="Summary text."),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Role headline."),
    skills: Optional[str] = typer.Option(
        None, "--skills", "-k", help="Comma-separated IT skills.",
    ),
    projects: Optional[Path] = typer.Option(
        None, "--projects", "-j", exists=True, dir_okay=False,
        help="Path to JSON file with a projects array.",
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Output file path. Defaults to ./out/cv.<format>.",
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", "-l", help="Language code: en or de. Defaults to $CVFORGE_DEFAULT_LANG or en.",
    ),
    output_format: OutputKind = typer.Option(
        OutputKind.PDF, "--format", "-f", help="Output format.",
    ),
) -> None:
    """Render a CV to PDF, HTML or DOCX."""
    fields: dict[str, object] = {
        "name": name,
        "summary": summary,
        "title": title,
        "lang": lang,
        "itSkills": _split_skills(skills),
        "photo": base64.b64encode(photo.read_bytes()).decode("ascii"),
    }
    if projects is not None:
        try:
            fields["projects"] = json.loads(projects.read_text(encoding="utf-8"))
        except ValueError as exc:
            cli_error(f"Projects file is not valid JSON: {exc}")

    try:
        settings = get_render_settings()
    except RuntimeError as exc:
        cli_error(str(exc))

    try:
        record = normalize_payload(
            fields,
            output=output_format,
            default_lang=settings.default_lang,
            shape=PayloadShape.JSON,
        )
        document = asyncio.run(_render(record, settings))
    except CVForgeError as exc:
        cli_error(f"Failed to generate CV: {exc}")

    target = out or Path("out") / f"cv.{output_format.extension}"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(document)
    logger.debug("Wrote %d bytes to %s", len(document), target)
    console.print(f"[green]CV generated at {target}[/green]")
