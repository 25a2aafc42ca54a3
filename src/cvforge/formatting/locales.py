"""Section titles per language."""

from __future__ import annotations

from types import MappingProxyType

from cvforge.core.models import Locale

DEFAULT_LANG = "en"

LOCALES = MappingProxyType({
    "en": Locale(
        summary_title="Summary",
        education_title="Education",
        methods_title="Methods",
        languages_title="Languages",
        expertise_title="Areas of Expertise",
        industry_know_how_title="Industry Know-How",
        it_skills_title="IT Skills",
        it_tools_title="IT Tools",
        projects_title="Projects",
        industry_title="Industry",
        duration_title="Duration",
        role_title="Role",
        core_business_topics_title="Core Business Topics",
        tools_title="Technology/Tools",
        achievements_title="Achievements:",
    ),
    "de": Locale(
        summary_title="Zusammenfassung",
        education_title="Ausbildung",
        methods_title="Methoden",
        languages_title="Sprachen",
        expertise_title="Expertise",
        industry_know_how_title="Branchen-Know-how",
        it_skills_title="IT-Kenntnisse",
        it_tools_title="IT-Werkzeuge",
        projects_title="Projekte",
        industry_title="Branche",
        duration_title="Dauer",
        role_title="Rolle",
        core_business_topics_title="Geschäftsthemen",
        tools_title="Technologien/Werkzeuge",
        achievements_title="Erfolge:",
    ),
})


def resolve_locale(code: str | None) -> Locale:
    """Return the titles for *code* (case-insensitive), English on a miss."""
    normalized = (code or DEFAULT_LANG).strip().lower()
    return LOCALES.get(normalized) or LOCALES[DEFAULT_LANG]
