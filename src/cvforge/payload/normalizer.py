"""Payload normalization: turn a loosely-typed request body into a ResumeRecord.

A body arrives either as a JSON object or as multipart form fields. List
fields may come as native lists, as one JSON-encoded string, or as a list of
JSON-encoded strings. The shape is detected once in
:func:`detect_shape`; every field then goes through one of the small
``_decode_*`` combinators below, which degrade to an empty value on
malformed optional data. Required fields raise :class:`ValidationError`.
"""

from __future__ import annotations

import base64
import binascii
import enum
import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cvforge.core.errors import ValidationError
from cvforge.core.models import (
    LIST_FIELDS,
    PROJECT_LIST_FIELDS,
    OutputKind,
    ProjectEntry,
    ResumeRecord,
)
from cvforge.formatting.locales import DEFAULT_LANG

logger = logging.getLogger(__name__)

PHOTO_REQUIRED = "Photo is required"


class PayloadShape(str, enum.Enum):
    JSON = "json"
    FORM = "form"


# Wire names (camelCase, as sent by clients) for each snake_case field.
_WIRE_NAMES: dict[str, str] = {
    "industry_know_how": "industryKnowHow",
    "it_skills": "itSkills",
    "it_tools": "itTools",
    "core_business_topics": "coreBusinessTopics",
    "project_methods": "projectMethods",
}


# ---------------------------------------------------------------------------
# Shape detection
# ---------------------------------------------------------------------------


def detect_shape(fields: Mapping[str, Any], photo_upload: bytes | None = None) -> PayloadShape:
    """Form payloads carry an uploaded file or only string (or string-list) values."""
    if photo_upload is not None:
        return PayloadShape.FORM
    for value in fields.values():
        if isinstance(value, str):
            continue
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            continue
        return PayloadShape.JSON
    return PayloadShape.FORM if fields else PayloadShape.JSON


# ---------------------------------------------------------------------------
# Decode-or-default combinators
# ---------------------------------------------------------------------------


def _lookup(fields: Mapping[str, Any], name: str) -> Any:
    if name in fields:
        return fields[name]
    wire = _WIRE_NAMES.get(name)
    if wire is not None:
        return fields.get(wire)
    return None


def _safe_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _decode_text(value: Any, shape: PayloadShape) -> str | None:
    """Return stripped text, or None when absent or blank."""
    if shape is PayloadShape.FORM and isinstance(value, list):
        value = value[0] if value else None
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    text = str(value).strip()
    return text or None


def _string_items(value: Any) -> list[str]:
    """Flatten one decoded value into display strings."""
    if value is None:
        return []
    if isinstance(value, list):
        items: list[str] = []
        for item in value:
            items.extend(_string_items(item))
        return items
    if isinstance(value, (dict, bool)):
        return []
    text = str(value).strip()
    return [text] if text else []


def _decode_string_list(value: Any) -> tuple[str, ...]:
    """Decode a list field of plain strings.

    A whole-field string must be a JSON list; anything else yields nothing.
    Inside a list, JSON-encoded elements are expanded and plain strings are
    kept as they are.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        parsed = _safe_json(value)
        return tuple(_string_items(parsed)) if isinstance(parsed, list) else ()
    if not isinstance(value, list):
        return ()
    items: list[str] = []
    for element in value:
        if isinstance(element, str):
            parsed = _safe_json(element)
            if isinstance(parsed, (list, str)):
                items.extend(_string_items(parsed))
                continue
        items.extend(_string_items(element))
    return tuple(items)


def _decode_object_list(value: Any) -> list[dict[str, Any]]:
    """Decode a list field of objects, dropping elements that are not objects."""
    if value is None:
        return []
    if isinstance(value, str):
        parsed = _safe_json(value)
        if isinstance(parsed, dict):
            return [parsed]
        value = parsed if isinstance(parsed, list) else []
    if not isinstance(value, list):
        return []
    objects: list[dict[str, Any]] = []
    for element in value:
        if isinstance(element, str):
            element = _safe_json(element)
        if isinstance(element, dict):
            objects.append(element)
        elif isinstance(element, list):
            objects.extend(e for e in element if isinstance(e, dict))
        else:
            logger.warning("Dropping undecodable list element: %r", element)
    return objects


def _decode_project(raw: dict[str, Any]) -> ProjectEntry | None:
    name = _decode_text(raw.get("name"), PayloadShape.JSON)
    if name is None:
        logger.warning("Dropping project without a name")
        return None
    data: dict[str, Any] = {
        "name": name,
        "from": _decode_text(raw.get("from"), PayloadShape.JSON),
        "to": _decode_text(raw.get("to"), PayloadShape.JSON),
        "industry": _decode_text(raw.get("industry"), PayloadShape.JSON),
        "role": _decode_text(raw.get("role"), PayloadShape.JSON),
    }
    for field in PROJECT_LIST_FIELDS:
        data[field] = _decode_string_list(_lookup(raw, field))
    try:
        return ProjectEntry.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning("Dropping invalid project %r: %s", name, exc)
        return None


def _decode_photo(value: Any, photo_upload: bytes | None, shape: PayloadShape) -> bytes:
    """Uploaded bytes win; otherwise a base64 field, optionally data-URL prefixed."""
    if photo_upload:
        return photo_upload
    if isinstance(value, (bytes, bytearray)) and value:
        return bytes(value)
    text = _decode_text(value, shape)
    if text is None:
        raise ValidationError("photo", PHOTO_REQUIRED)
    if text.startswith("data:") and "," in text:
        text = text.split(",", 1)[1]
    try:
        photo = base64.b64decode("".join(text.split()), validate=False)
    except (binascii.Error, ValueError):
        raise ValidationError("photo", "Invalid base64 photo format") from None
    if not photo:
        raise ValidationError("photo", PHOTO_REQUIRED)
    return photo


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize_payload(
    fields: Mapping[str, Any],
    *,
    photo_upload: bytes | None = None,
    output: OutputKind = OutputKind.HTML,
    default_lang: str = DEFAULT_LANG,
    shape: PayloadShape | None = None,
) -> ResumeRecord:
    """Build a canonical ResumeRecord from a JSON body or form fields.

    Pass *shape* when the transport already says what the payload is;
    otherwise it is guessed with :func:`detect_shape`.

    Raises ``ValidationError`` naming the first missing or invalid required
    field (``name``, ``summary``, ``photo``). Malformed optional data is
    dropped, never raised.
    """
    if shape is None:
        shape = detect_shape(fields, photo_upload)
    logger.debug("Normalizing %s payload with fields %s", shape.value, sorted(fields))

    name = _decode_text(fields.get("name"), shape)
    if name is None:
        raise ValidationError("name", "Name is required")

    summary = _decode_text(fields.get("summary"), shape)
    if summary is None:
        intro = _decode_text(fields.get("intro"), shape)
        main = _decode_text(fields.get("main"), shape)
        summary = "\n\n".join(part for part in (intro, main) if part) or None
    if summary is None:
        raise ValidationError("summary", "Summary is required")

    photo = _decode_photo(fields.get("photo"), photo_upload, shape)

    lists = {field: _decode_string_list(_lookup(fields, field)) for field in LIST_FIELDS}
    projects = [
        project
        for project in map(_decode_project, _decode_object_list(fields.get("projects")))
        if project is not None
    ]
    lang = (_decode_text(fields.get("lang"), shape) or default_lang).lower()

    return ResumeRecord(
        name=name,
        title=_decode_text(fields.get("title"), shape),
        summary=summary,
        projects=tuple(projects),
        photo=photo,
        lang=lang,
        output=output,
        **lists,
    )
