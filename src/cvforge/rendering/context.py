"""Render context: the flat, backend-agnostic mapping every template consumes."""

from __future__ import annotations

from typing import Any

from cvforge.core.models import (
    LIST_FIELDS,
    PROJECT_LIST_FIELDS,
    Locale,
    ProjectEntry,
    ResumeRecord,
)
from cvforge.formatting.dates import compute_duration
from cvforge.formatting.images import to_data_url

RenderContext = dict[str, Any]


def _project_context(project: ProjectEntry) -> dict[str, Any]:
    ctx: dict[str, Any] = {
        "name": project.name,
        "from": project.from_date,
        "to": project.to_date,
        "industry": project.industry,
        "role": project.role,
        "duration": compute_duration(project.from_date, project.to_date),
    }
    for field in PROJECT_LIST_FIELDS:
        values = list(getattr(project, field))
        ctx[field] = values
        ctx[f"has_{field}"] = len(values) > 0
    return ctx


def build_context(record: ResumeRecord, locale: Locale) -> RenderContext:
    """Combine *record*, *locale* and derived fields into a fresh context.

    Pure: the record is only read, and every list in the result is a new
    object so a backend mutating its context cannot leak into another call.
    """
    ctx: RenderContext = {
        "name": record.name,
        "title": record.title or "",
        "has_title": bool(record.title),
        "summary": record.summary,
        "has_summary": bool(record.summary),
        "lang": record.lang,
        "photo": to_data_url(record.photo),
        "photo_data": record.photo,
    }
    for field in LIST_FIELDS:
        values = list(getattr(record, field))
        ctx[field] = values
        ctx[f"has_{field}"] = len(values) > 0

    projects = [_project_context(p) for p in record.projects]
    ctx["projects"] = projects
    ctx["has_projects"] = len(projects) > 0

    ctx.update(locale.model_dump())
    return ctx
