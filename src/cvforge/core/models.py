from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Output kinds
# ---------------------------------------------------------------------------

class OutputKind(str, enum.Enum):
    HTML = "html"
    PDF = "pdf"
    DOCX = "docx"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @property
    def extension(self) -> str:
        return self.value


_MEDIA_TYPES = {
    OutputKind.HTML: "text/html; charset=utf-8",
    OutputKind.PDF: "application/pdf",
    OutputKind.DOCX: (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    ),
}


# ---------------------------------------------------------------------------
# Résumé record
# ---------------------------------------------------------------------------

class ProjectEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    from_date: str | None = Field(default=None, alias="from")
    to_date: str | None = Field(default=None, alias="to")  # None means ongoing
    industry: str | None = None
    role: str | None = None
    core_business_topics: tuple[str, ...] = ()
    project_methods: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    achievements: tuple[str, ...] = ()


class ResumeRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    title: str | None = None
    summary: str = Field(min_length=1)
    education: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    expertise: tuple[str, ...] = ()
    industry_know_how: tuple[str, ...] = ()
    it_skills: tuple[str, ...] = ()
    it_tools: tuple[str, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
    photo: bytes = Field(min_length=1, repr=False)
    lang: str = "en"
    output: OutputKind = OutputKind.HTML

    @property
    def download_name(self) -> str:
        """Attachment file name: ``cv_<name with whitespace runs → _>.<ext>``."""
        stem = "_".join(self.name.split())
        return f"cv_{stem}.{self.output.extension}"


# Optional string-list fields, in the order sections appear in the document.
LIST_FIELDS: tuple[str, ...] = (
    "education",
    "methods",
    "languages",
    "expertise",
    "industry_know_how",
    "it_skills",
    "it_tools",
)

PROJECT_LIST_FIELDS: tuple[str, ...] = (
    "core_business_topics",
    "project_methods",
    "tools",
    "achievements",
)


# ---------------------------------------------------------------------------
# Locale
# ---------------------------------------------------------------------------

class Locale(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary_title: str
    education_title: str
    methods_title: str
    languages_title: str
    expertise_title: str
    industry_know_how_title: str
    it_skills_title: str
    it_tools_title: str
    projects_title: str
    industry_title: str
    duration_title: str
    role_title: str
    core_business_topics_title: str
    tools_title: str
    achievements_title: str
