"""Tests for the paginated LaTeX resume template."""

from __future__ import annotations

import pytest

from resume_canvas.services.pagination import PageCapacity
from resume_canvas.services.resume_data import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeDocument,
    ResumeLink,
    ResumeProfile,
)
from resume_canvas.templates import get_template, list_templates
from resume_canvas.templates.base import ResumeTemplate
from resume_canvas.templates.paginated import PaginatedResumeTemplate

# ======================================================================
# Registry
# ======================================================================


class TestTemplateRegistry:
    def test_registered_names(self):
        assert list_templates() == ["classic", "red-accent"]

    def test_get_classic(self):
        assert get_template("classic").name == "Classic"

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown template"):
            get_template("nonexistent")


# ======================================================================
# Helpers
# ======================================================================


class TestTemplateHelpers:
    def test_escape_specials(self):
        assert ResumeTemplate.escape_latex("A & B 100% my_var #1") == r"A \& B 100\% my\_var \#1"

    def test_escape_backslash_and_braces(self):
        assert ResumeTemplate.escape_latex(r"\{x}") == r"\textbackslash{}\{x\}"

    def test_escape_tilde_and_caret(self):
        assert ResumeTemplate.escape_latex("~^") == r"\textasciitilde{}\textasciicircum{}"

    def test_format_iso_range(self):
        assert ResumeTemplate.format_date_range("2018-08-15", "2022-05") == "Aug. 2018 -- May 2022"

    def test_free_text_dates_kept(self):
        assert ResumeTemplate.format_date_range("Jan 2016", "Present") == "Jan 2016 -- Present"

    def test_single_date(self):
        assert ResumeTemplate.format_date_range(None, "2020-01-01") == "Jan. 2020"
        assert ResumeTemplate.format_date_range("", "") == ""

    def test_strip_protocol(self):
        assert ResumeTemplate._strip_protocol("https://example.com/") == "example.com"


# ======================================================================
# Paginated output
# ======================================================================


def _document(n_exp: int = 1, n_edu: int = 1, n_proj: int = 1) -> ResumeDocument:
    return ResumeDocument(
        profile=ResumeProfile(
            first_name="Jane",
            last_name="Doe",
            pronouns="she/her",
            title="Software Engineer",
            email="jane@example.com",
            phone="555-0100",
            skills=("Python", "SQL"),
            links=(ResumeLink(label="GitHub", url="https://github.com/jane_doe"),),
        ),
        experience=tuple(
            ExperienceEntry(
                company=f"Company {i}",
                position="Engineer",
                employment_type="Full-time",
                start_date="2020-01",
                end_date="Present",
                tasks=("Built services", "- Designed the API", "Mentored interns"),
            )
            for i in range(n_exp)
        ),
        education=tuple(
            EducationEntry(
                institution=f"School {i}",
                degree="BSc Computer Science",
                grade="First",
                details=("Dean's list",),
            )
            for i in range(n_edu)
        ),
        projects=tuple(
            ProjectEntry(
                name=f"Project {i}",
                technologies="FastAPI",
                link="https://example.com/p",
            )
            for i in range(n_proj)
        ),
    )


class TestPaginatedTemplate:
    def test_single_page_has_no_newpage(self):
        tex = PaginatedResumeTemplate().build(_document()).dumps()
        assert r"\newpage" not in tex
        assert "JANE DOE" in tex
        assert r"\section{Experience}" in tex
        assert r"\section{Education}" in tex
        assert r"\section{Projects}" in tex
        assert r"\section{Skills}" in tex

    def test_one_latex_page_per_layout_page(self):
        document = _document(n_exp=5)
        tex = PaginatedResumeTemplate().build(document, PageCapacity(experience=3)).dumps()
        assert tex.count(r"\newpage") == 1

    def test_profile_only_on_first_page(self):
        tex = PaginatedResumeTemplate().build(_document(n_exp=5)).dumps()
        first, second = tex.split(r"\newpage")
        assert "JANE DOE" in first
        assert "JANE DOE" not in second
        assert r"\section{Skills}" not in second

    def test_continuation_headings(self):
        tex = PaginatedResumeTemplate().build(_document(n_exp=5)).dumps()
        assert r"\section{Experience (cont.)}" in tex
        assert tex.count(r"\section{Education") == 1

    def test_sub_items_are_nested(self):
        tex = PaginatedResumeTemplate().build(_document()).dumps()
        assert tex.count(r"\begin{itemize}") == tex.count(r"\end{itemize}")
        assert r"\item Designed the API" in tex

    def test_href_keeps_raw_url(self):
        tex = PaginatedResumeTemplate().build(_document()).dumps()
        assert r"\href{https://github.com/jane_doe}{GitHub}" in tex

    def test_accent_color_in_preamble(self):
        tex = get_template("red-accent").build(_document()).dumps()
        assert r"\definecolor{accent}{HTML}{B22222}" in tex
