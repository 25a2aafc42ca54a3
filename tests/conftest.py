"""Shared test fixtures: sample records, photos and a fake headless browser."""

from __future__ import annotations

import asyncio
import base64
from typing import Any

import pytest

from cvforge.core.config import RenderSettings
from cvforge.core.models import OutputKind, ProjectEntry, ResumeRecord

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 24


# A real 1x1 PNG, needed wherever the photo is actually embedded (DOCX).
TINY_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


# ---------------------------------------------------------------------------
# Fake browser
# ---------------------------------------------------------------------------


class FakePage:
    def __init__(self, content_delay: float = 0.0, pdf_delay: float = 0.0):
        self.content_delay = content_delay
        self.pdf_delay = pdf_delay
        self.html: str | None = None
        self.content_kwargs: dict[str, Any] = {}
        self.pdf_kwargs: dict[str, Any] = {}
        self.closed = False

    async def set_content(self, html: str, **kwargs: Any) -> None:
        await asyncio.sleep(self.content_delay)
        self.html = html
        self.content_kwargs = kwargs

    async def pdf(self, **kwargs: Any) -> bytes:
        await asyncio.sleep(self.pdf_delay)
        self.pdf_kwargs = kwargs
        return b"%PDF-1.7 fake"

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, content_delay: float = 0.0, pdf_delay: float = 0.0):
        self.content_delay = content_delay
        self.pdf_delay = pdf_delay
        self.pages: list[FakePage] = []
        self.closed = False

    async def new_page(self) -> FakePage:
        page = FakePage(self.content_delay, self.pdf_delay)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True


class FakeLauncher:
    """Launcher returning a new FakeBrowser per launch.

    *delays* lists ``(content_delay, pdf_delay)`` per launch; launches past
    the end of the list get a fast browser.
    """

    def __init__(
        self,
        delays: list[tuple[float, float]] | None = None,
        *,
        launch_delay: float = 0.0,
        fail: Exception | None = None,
    ):
        self.delays = list(delays or [])
        self.launch_delay = launch_delay
        self.fail = fail
        self.browsers: list[FakeBrowser] = []
        self.timeouts: list[float] = []

    async def __call__(self, timeout: float) -> FakeBrowser:
        self.timeouts.append(timeout)
        await asyncio.sleep(self.launch_delay)
        if self.fail is not None:
            raise self.fail
        index = len(self.browsers)
        content_delay, pdf_delay = self.delays[index] if index < len(self.delays) else (0.0, 0.0)
        browser = FakeBrowser(content_delay, pdf_delay)
        self.browsers.append(browser)
        return browser


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def fast_settings() -> RenderSettings:
    return RenderSettings(launch_timeout=1.0, content_timeout=0.2, pdf_timeout=0.2)


@pytest.fixture
def sample_project() -> ProjectEntry:
    return ProjectEntry.model_validate({
        "name": "Core Banking Migration",
        "from": "2023-06-01",
        "to": "2024-03-01",
        "industry": "Banking",
        "role": "Lead Architect",
        "core_business_topics": ["Payments", "Ledger"],
        "project_methods": ["Scrum"],
        "tools": ["Kafka", "PostgreSQL"],
        "achievements": ["Cut batch runtime by 60%"],
    })


@pytest.fixture
def sample_record(sample_project: ProjectEntry) -> ResumeRecord:
    return ResumeRecord(
        name="Jane Doe",
        title="Solution Architect",
        summary="Architect with 12 years in financial services.",
        education=["M.Sc. Computer Science"],
        methods=["Scrum", "Kanban"],
        languages=["English", "German"],
        expertise=["Cloud Architecture"],
        industry_know_how=["Banking"],
        it_skills=["Python", "Java"],
        it_tools=["Terraform"],
        projects=[sample_project],
        photo=TINY_PNG,
        lang="en",
        output=OutputKind.HTML,
    )


@pytest.fixture
def minimal_record() -> ResumeRecord:
    return ResumeRecord(name="Jane Doe", summary="Short summary.", photo=TINY_PNG)
