"""Tests for environment-driven render settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from cvforge.core.config import RenderSettings, get_port, get_render_settings
from cvforge.rendering import config as defaults

_VARS = (
    "CVFORGE_LAUNCH_TIMEOUT",
    "CVFORGE_CONTENT_TIMEOUT",
    "CVFORGE_PDF_TIMEOUT",
    "CVFORGE_HEADLESS",
    "CVFORGE_DOCX_TEMPLATE",
    "CVFORGE_DEFAULT_LANG",
    "PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestRenderSettings:
    def test_defaults(self):
        settings = get_render_settings()
        assert settings == RenderSettings()
        assert settings.launch_timeout == defaults.LAUNCH_TIMEOUT == 30.0
        assert settings.content_timeout == defaults.CONTENT_TIMEOUT == 15.0
        assert settings.pdf_timeout == defaults.PDF_TIMEOUT == 20.0
        assert settings.headless is True
        assert settings.docx_template is None
        assert settings.default_lang == "en"

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CVFORGE_LAUNCH_TIMEOUT", "5")
        monkeypatch.setenv("CVFORGE_PDF_TIMEOUT", "2.5")
        monkeypatch.setenv("CVFORGE_HEADLESS", "false")
        monkeypatch.setenv("CVFORGE_DOCX_TEMPLATE", "/tmp/cv.docx")
        settings = get_render_settings()
        assert settings.launch_timeout == 5.0
        assert settings.pdf_timeout == 2.5
        assert settings.headless is False
        assert settings.docx_template == Path("/tmp/cv.docx")

    def test_bad_number(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CVFORGE_CONTENT_TIMEOUT", "soon")
        with pytest.raises(RuntimeError, match="CVFORGE_CONTENT_TIMEOUT"):
            get_render_settings()

    def test_non_positive_number(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CVFORGE_PDF_TIMEOUT", "0")
        with pytest.raises(RuntimeError, match="positive"):
            get_render_settings()


class TestPort:
    def test_default(self):
        assert get_port() == 3000

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PORT", "8080")
        assert get_port() == 8080

    def test_bad_value(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PORT", "http")
        with pytest.raises(RuntimeError, match="PORT"):
            get_port()
