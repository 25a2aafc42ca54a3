"""Runtime configuration: loads render settings from the environment.

On import, this module loads the project's ``.env`` file (if present) so that
values set there are available via ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from cvforge.core.paths import get_env_file
from cvforge.formatting.locales import DEFAULT_LANG
from cvforge.rendering import config as defaults

logger = logging.getLogger(__name__)

# ``override=False`` means existing env vars win.
_env_path = get_env_file()
load_dotenv(_env_path, override=False)
logger.debug("Loaded .env from %s (exists=%s)", _env_path, _env_path.exists())


@dataclass(frozen=True)
class RenderSettings:
    launch_timeout: float = defaults.LAUNCH_TIMEOUT
    content_timeout: float = defaults.CONTENT_TIMEOUT
    pdf_timeout: float = defaults.PDF_TIMEOUT
    headless: bool = True
    docx_template: Path | None = None
    default_lang: str = DEFAULT_LANG


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number of seconds, got {raw!r}.") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {raw!r}.")
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw not in {"0", "false", "no", "off"}


def get_render_settings() -> RenderSettings:
    """Read render settings from the environment, falling back to the defaults."""
    template = os.environ.get("CVFORGE_DOCX_TEMPLATE", "")
    settings = RenderSettings(
        launch_timeout=_float_env("CVFORGE_LAUNCH_TIMEOUT", defaults.LAUNCH_TIMEOUT),
        content_timeout=_float_env("CVFORGE_CONTENT_TIMEOUT", defaults.CONTENT_TIMEOUT),
        pdf_timeout=_float_env("CVFORGE_PDF_TIMEOUT", defaults.PDF_TIMEOUT),
        headless=_bool_env("CVFORGE_HEADLESS", True),
        docx_template=Path(template) if template else None,
        default_lang=os.environ.get("CVFORGE_DEFAULT_LANG", "") or DEFAULT_LANG,
    )
    logger.debug("Render settings: %s", settings)
    return settings


def get_port(default: int = 3000) -> int:
    """Return the HTTP port from ``PORT``. Raises RuntimeError on a bad value."""
    raw = os.environ.get("PORT", "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"PORT must be an integer, got {raw!r}.") from None
