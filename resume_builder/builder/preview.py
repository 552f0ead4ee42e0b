from __future__ import annotations

import html
import logging
import re
import tempfile
import webbrowser
from pathlib import Path
from typing import Callable, List, Tuple

import markdown

from resume_builder.schemas.pydantic import (
    Award,
    Certification,
    Education,
    Experience,
    Project,
    ResumeDocument,
)

logger = logging.getLogger(__name__)

PrintCallback = Callable[[str], None]

SECTION_TITLES = [
    "Professional Summary",
    "Work Experience",
    "Education",
    "Certifications & Training",
    "Awards & Achievements",
    "Projects",
    "Skills",
]

_HTML_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: Georgia, serif; max-width: 800px; margin: 2em auto; color: #222; }}
h1 {{ margin-bottom: 0.2em; }}
h2 {{ border-bottom: 1px solid #999; padding-bottom: 0.2em; }}
@media print {{ body {{ margin: 0; }} }}
</style>
</head>
<body onload="window.print()">
{body}
</body>
</html>
"""


def open_in_browser(html: str) -> None:
    """Write the page to a temporary file and open it in the system browser's print dialog."""
    with tempfile.NamedTemporaryFile("w", suffix=".html", delete=False, encoding="utf-8") as handle:
        handle.write(html)
    logger.info(f"Opening resume for printing: {handle.name}")
    webbrowser.open(Path(handle.name).as_uri())


_MARKDOWN_INLINE = re.compile(r"([\\`*_\[\]!])")
_ORDERED_MARKER = re.compile(r"^(\d+)\.(?=\s|$)")


def _escape(text: str) -> str:
    """Make user text render literally: no raw HTML and no Markdown markup."""
    lines = []
    for line in text.strip().splitlines():
        line = _MARKDOWN_INLINE.sub(r"\\\1", html.escape(line.strip()))
        line = _ORDERED_MARKER.sub(r"\1\\.", line)
        if line[:1] in ("#", "+", "-"):
            line = "\\" + line
        elif line[:1] == "=":
            # "=" has no backslash escape; a setext underline must not start the line
            line = "&#61;" + line[1:]
        lines.append(line)
    return "\n".join(lines)


def _join(parts: List[str], separator: str) -> str:
    return separator.join(_escape(part) for part in parts if part and part.strip())


def _years(start: str, end: str) -> str:
    if start and end:
        return f"{start} - {end}"
    return start or end


def _experience(entry: Experience) -> List[str]:
    end = "Present" if entry.current_job else entry.end_year
    lines = [f"### {_escape(entry.position)}", f"**{_escape(entry.company)}**"]
    meta = _join([_years(entry.start_year, end), entry.location], " | ")
    if meta:
        lines.append(meta)
    if entry.description.strip():
        lines += ["", _escape(entry.description)]
    return lines


def _education(entry: Education) -> List[str]:
    heading = _escape(entry.degree)
    if entry.field_of_study.strip():
        heading = f"{heading} in {_escape(entry.field_of_study)}"
    lines = [f"### {heading}", f"**{_escape(entry.institution)}**"]
    meta = _join([_years(entry.start_year, entry.end_year), entry.location], " | ")
    if meta:
        lines.append(meta)
    if entry.description.strip():
        lines += ["", _escape(entry.description)]
    return lines


def _certification(entry: Certification) -> List[str]:
    lines = [f"### {_escape(entry.name)}", _join([entry.issuer, entry.date], " | ")]
    if entry.description.strip():
        lines += ["", _escape(entry.description)]
    return lines


def _award(entry: Award) -> List[str]:
    lines = [f"### {_escape(entry.title)}", _join([entry.issuer, entry.date], " | ")]
    if entry.description.strip():
        lines += ["", _escape(entry.description)]
    return lines


def _project(entry: Project) -> List[str]:
    lines = [f"### {_escape(entry.name)}"]
    meta = _join([_years(entry.start_year, entry.end_year), entry.link], " | ")
    if meta:
        lines.append(meta)
    if entry.technologies.strip():
        lines.append(f"*Technologies: {_escape(entry.technologies)}*")
    lines += ["", _escape(entry.description)]
    return lines


class ResumePreview:
    """
    Read-only rendering of a resume document.

    Sections appear in a fixed order and an empty section is left out
    entirely, heading included.
    """

    def __init__(self, document: ResumeDocument, trigger_print: PrintCallback = open_in_browser):
        self.document = document.model_copy(deep=True)
        self._trigger_print = trigger_print

    def header(self) -> List[str]:
        info = self.document.personal_info
        lines = []
        if info.full_name.strip():
            lines.append(f"# {_escape(info.full_name)}")
        for line in (
            _join([info.city, info.state, info.country], ", "),
            _join([info.email, info.phone], " | "),
            _join(
                [
                    f"LinkedIn: {info.linkedin_url.strip()}" if info.linkedin_url else "",
                    f"GitHub: {info.github_url.strip()}" if info.github_url else "",
                    f"Portfolio: {info.portfolio_url.strip()}" if info.portfolio_url else "",
                ],
                " | ",
            ),
        ):
            if line:
                lines += ["", line]
        return lines

    def sections(self) -> List[Tuple[str, List[str]]]:
        """``(title, markdown lines)`` for every non-empty section, in display order."""
        doc = self.document
        blocks = {
            "Professional Summary": [_escape(doc.personal_info.summary)] if doc.personal_info.summary.strip() else [],
            "Work Experience": [_experience(e) for e in doc.experiences],
            "Education": [_education(e) for e in doc.educations],
            "Certifications & Training": [_certification(e) for e in doc.certifications],
            "Awards & Achievements": [_award(e) for e in doc.awards],
            "Projects": [_project(e) for e in doc.projects],
        }
        rendered = []
        for title in SECTION_TITLES[:-1]:
            entries = blocks[title]
            if not entries:
                continue
            lines: List[str] = []
            for entry in entries:
                if lines:
                    lines.append("")
                lines += entry if isinstance(entry, list) else [entry]
            rendered.append((title, lines))
        if doc.skills:
            skills = [
                f"- {_escape(skill.name)} ({_escape(skill.level)})" if skill.level.strip() else f"- {_escape(skill.name)}"
                for skill in doc.skills
            ]
            rendered.append(("Skills", skills))
        return rendered

    def to_markdown(self) -> str:
        lines = self.header()
        for title, body in self.sections():
            lines += ["", f"## {title}", ""] + body
        return "\n".join(lines).strip() + "\n"

    def to_html(self) -> str:
        body = markdown.markdown(self.to_markdown())
        return _HTML_PAGE.format(title=html.escape(self.document.title), body=body)

    def print_resume(self) -> None:
        logger.debug(f"Printing resume '{self.document.title}'")
        self._trigger_print(self.to_html())
