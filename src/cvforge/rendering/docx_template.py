"""Built-in Word template, used when no template file is configured.

The document is assembled with python-docx and carries docxtpl tags, so it
goes through exactly the same field injection as a hand-made template.
"""

from __future__ import annotations

from functools import lru_cache
from io import BytesIO

from docx import Document

# (flag, title key, list key) for the plain list sections, in document order.
_LIST_SECTIONS = (
    ("has_expertise", "expertise_title", "expertise"),
    ("has_industry_know_how", "industry_know_how_title", "industry_know_how"),
    ("has_education", "education_title", "education"),
    ("has_languages", "languages_title", "languages"),
    ("has_methods", "methods_title", "methods"),
    ("has_it_skills", "it_skills_title", "it_skills"),
    ("has_it_tools", "it_tools_title", "it_tools"),
)

_PROJECT_LISTS = (
    ("has_core_business_topics", "core_business_topics_title", "core_business_topics"),
    ("has_project_methods", "methods_title", "project_methods"),
    ("has_tools", "tools_title", "tools"),
)


@lru_cache(maxsize=1)
def default_template_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("{{ embed_photo(photo_data) }}")
    doc.add_heading("{{ name }}", level=0)
    doc.add_paragraph("{%p if has_title %}")
    doc.add_paragraph("{{ title }}")
    doc.add_paragraph("{%p endif %}")

    doc.add_heading("{{ summary_title }}", level=1)
    doc.add_paragraph("{{ summary }}")

    for flag, title, items in _LIST_SECTIONS:
        doc.add_paragraph(f"{{%p if {flag} %}}")
        doc.add_heading(f"{{{{ {title} }}}}", level=1)
        doc.add_paragraph(f"{{%p for item in {items} %}}")
        doc.add_paragraph("{{ item }}", style="List Bullet")
        doc.add_paragraph("{%p endfor %}")
        doc.add_paragraph("{%p endif %}")

    doc.add_paragraph("{%p if has_projects %}")
    doc.add_heading("{{ projects_title }}", level=1)
    doc.add_paragraph("{%p for project in projects %}")
    doc.add_heading("{{ project.name }}", level=2)
    doc.add_paragraph("{%p if project.duration %}")
    doc.add_paragraph("{{ duration_title }}: {{ project.duration }}")
    doc.add_paragraph("{%p endif %}")
    doc.add_paragraph("{%p if project.industry %}")
    doc.add_paragraph("{{ industry_title }}: {{ project.industry }}")
    doc.add_paragraph("{%p endif %}")
    doc.add_paragraph("{%p if project.role %}")
    doc.add_paragraph("{{ role_title }}: {{ project.role }}")
    doc.add_paragraph("{%p endif %}")
    for flag, title, items in _PROJECT_LISTS:
        doc.add_paragraph(f"{{%p if project.{flag} %}}")
        doc.add_paragraph(f"{{{{ {title} }}}}: {{{{ project.{items} | join(', ') }}}}")
        doc.add_paragraph("{%p endif %}")
    doc.add_paragraph("{%p if project.has_achievements %}")
    doc.add_paragraph("{{ achievements_title }}")
    doc.add_paragraph("{%p for achievement in project.achievements %}")
    doc.add_paragraph("{{ achievement }}", style="List Bullet")
    doc.add_paragraph("{%p endfor %}")
    doc.add_paragraph("{%p endif %}")
    doc.add_paragraph("{%p endfor %}")
    doc.add_paragraph("{%p endif %}")

    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()
