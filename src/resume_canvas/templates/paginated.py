"""A4 resume template that renders the pagination engine's pages.

The profile block (name, title, personal info, skills, links) appears on
the first page only. Every later page holds only the continuation entries
that :func:`~resume_canvas.services.pagination.paginate` assigned to it,
and each page is closed with ``\\newpage``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from resume_canvas.services.pagination import Page, PageCapacity, paginate
from resume_canvas.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from resume_canvas.services.resume_data import (
        EducationEntry,
        ExperienceEntry,
        ProjectEntry,
        ResumeDocument,
        ResumeProfile,
    )

__all__ = ["PaginatedResumeTemplate"]

# ---------------------------------------------------------------------------
# LaTeX preamble fragments
# ---------------------------------------------------------------------------

_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("a4paper,margin=0.75in")),
    Package("xcolor"),
    Package("titlesec"),
    Package("enumitem"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
]

_PREAMBLE_SETUP = r"""
\setlength{\parindent}{0pt}
\setcounter{secnumdepth}{0}
\titleformat{\section}{\large\bfseries\color{accent}\uppercase}{}{}{}[\titlerule]
\titlespacing{\section}{0pt}{8pt}{4pt}
\setlist[itemize]{noitemsep, topsep=2pt, left=0pt .. 1.5em}
\pdfgentounicode=1
"""

# Tasks written as "- text" are sub-points of the preceding task.
_SUB_ITEM_PREFIX = "- "


class PaginatedResumeTemplate(ResumeTemplate):
    """Multi-page resume with a first-page profile block."""

    def __init__(self, display_name: str = "Classic", accent_hex: str = "1E4D92") -> None:
        self._display_name = display_name
        self.accent_hex = accent_hex

    @property
    def name(self) -> str:
        return self._display_name

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, document: ResumeDocument, capacity: PageCapacity | None = None) -> Document:
        pages = paginate(document.experience, document.education, document.projects, capacity)
        doc = self._create_document()

        seen: set[str] = set()
        for index, page in enumerate(pages):
            if index == 0:
                self._add_profile(doc, document.profile)
            self._add_page(doc, page, seen)
            if index < len(pages) - 1:
                doc.append(NoEscape(r"\newpage"))
        return doc

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _create_document(self) -> Document:
        doc = Document(
            documentclass="article",
            document_options=["a4paper", "11pt"],
            page_numbers=False,
            indent=False,
            lmodern=False,
            textcomp=False,
            microtype=False,
            fontenc=None,
            inputenc=None,
        )
        for pkg in _PACKAGES:
            doc.packages.append(pkg)
        doc.preamble.append(NoEscape(rf"\definecolor{{accent}}{{HTML}}{{{self.accent_hex}}}"))
        doc.preamble.append(NoEscape(_PREAMBLE_SETUP))
        return doc

    def _add_page(self, doc: Document, page: Page, seen: set[str]) -> None:
        if page.experiences:
            doc.append(NoEscape(self._heading("Experience", seen)))
            self._add_experience(doc, page.experiences)
        if page.education:
            doc.append(NoEscape(self._heading("Education", seen)))
            self._add_education(doc, page.education)
        if page.projects:
            doc.append(NoEscape(self._heading("Projects", seen)))
            self._add_projects(doc, page.projects)

    @staticmethod
    def _heading(title: str, seen: set[str]) -> str:
        label = f"{title} (cont.)" if title in seen else title
        seen.add(title)
        return rf"\section{{{label}}}"

    # -- profile -----------------------------------------------------------

    def _add_profile(self, doc: Document, profile: ResumeProfile) -> None:
        esc = self.escape_latex
        lines = [r"\begin{center}"]
        if profile.full_name:
            name = esc(profile.full_name.upper())
            lines.append(rf"{{\Huge\bfseries\color{{accent}} {name}}}\\[2pt]")
        subtitle = " $\\cdot$ ".join(
            esc(part) for part in (profile.pronouns, profile.title) if part
        )
        if subtitle:
            lines.append(rf"{{\large {subtitle}}}\\[4pt]")

        contact = [esc(part) for part in (profile.phone, profile.address) if part]
        if profile.email:
            contact.insert(0, rf"\href{{mailto:{profile.email}}}{{{esc(profile.email)}}}")
        for link in profile.links:
            label = esc(link.label or self._strip_protocol(link.url))
            contact.append(rf"\href{{{link.url}}}{{{label}}}")
        if contact:
            lines.append(r"\small " + r" $|$ ".join(contact))
        lines.append(r"\end{center}")
        doc.append(NoEscape("\n".join(lines)))

        if profile.skills:
            skill_lines = [r"\section{Skills}", r"\begin{itemize}"]
            skill_lines.extend(rf"\item {esc(skill)}" for skill in profile.skills)
            skill_lines.append(r"\end{itemize}")
            doc.append(NoEscape("\n".join(skill_lines)))

    # -- experience --------------------------------------------------------

    def _add_experience(self, doc: Document, entries: tuple[ExperienceEntry, ...]) -> None:
        esc = self.escape_latex
        lines: list[str] = []
        for entry in entries:
            position = esc(entry.position)
            if entry.employment_type:
                position += rf" \textit{{({esc(entry.employment_type)})}}"
            date_range = esc(self.format_date_range(entry.start_date, entry.end_date))
            lines.append(rf"\textbf{{{position}}} \hfill {date_range}\\")
            lines.append(rf"{esc(entry.company)}\\")
            lines.extend(self._task_list(entry.tasks))
            lines.append(r"\smallskip")
        doc.append(NoEscape("\n".join(lines)))

    def _task_list(self, tasks: tuple[str, ...]) -> list[str]:
        if not tasks:
            return []
        esc = self.escape_latex
        lines = [r"\begin{itemize}"]
        in_sublist = False
        for task in tasks:
            if task.startswith(_SUB_ITEM_PREFIX):
                if not in_sublist:
                    lines.append(r"\begin{itemize}")
                    in_sublist = True
                lines.append(rf"\item {esc(task[len(_SUB_ITEM_PREFIX):])}")
                continue
            if in_sublist:
                lines.append(r"\end{itemize}")
                in_sublist = False
            lines.append(rf"\item {esc(task)}")
        if in_sublist:
            lines.append(r"\end{itemize}")
        lines.append(r"\end{itemize}")
        return lines

    # -- education ---------------------------------------------------------

    def _add_education(self, doc: Document, entries: tuple[EducationEntry, ...]) -> None:
        esc = self.escape_latex
        lines: list[str] = []
        for entry in entries:
            date_range = esc(self.format_date_range(entry.start_date, entry.end_date))
            lines.append(rf"\textbf{{{esc(entry.degree)}}} \hfill {date_range}\\")
            place = esc(entry.institution)
            if entry.location:
                place += f", {esc(entry.location)}"
            lines.append(rf"{place}\\")
            details = list(entry.details)
            if entry.grade:
                details.insert(0, f"Grade: {entry.grade}")
            if details:
                lines.append(r"\begin{itemize}")
                lines.extend(rf"\item {esc(detail)}" for detail in details)
                lines.append(r"\end{itemize}")
            lines.append(r"\smallskip")
        doc.append(NoEscape("\n".join(lines)))

    # -- projects ----------------------------------------------------------

    def _add_projects(self, doc: Document, entries: tuple[ProjectEntry, ...]) -> None:
        esc = self.escape_latex
        lines: list[str] = []
        for entry in entries:
            heading = rf"\textbf{{{esc(entry.name)}}}"
            if entry.technologies:
                heading += rf" $|$ \emph{{{esc(entry.technologies)}}}"
            if entry.link:
                display = self._strip_protocol(entry.link)
                heading += rf" $|$ \href{{{entry.link}}}{{\underline{{{esc(display)}}}}}"
            date_range = esc(self.format_date_range(entry.start_date, entry.end_date))
            lines.append(rf"{heading} \hfill {date_range}\\")
            if entry.description:
                lines.append(rf"{esc(entry.description)}\\")
            lines.append(r"\smallskip")
        doc.append(NoEscape("\n".join(lines)))
