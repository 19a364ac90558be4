"""Abstract base class for paginated resume templates."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pylatex import Document

    from resume_canvas.services.pagination import PageCapacity
    from resume_canvas.services.resume_data import ResumeDocument

__all__ = ["ResumeTemplate"]

# Characters that have special meaning in LaTeX, replaced in a single pass.
_LATEX_REPLACEMENTS = {
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    "\\": r"\textbackslash{}",
}
_LATEX_SPECIAL = re.compile(r"[&%$#_{}~^\\]")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})(?:-\d{2})?$")

_MONTH_ABBR = [
    "",
    "Jan.",
    "Feb.",
    "Mar.",
    "Apr.",
    "May",
    "Jun.",
    "Jul.",
    "Aug.",
    "Sep.",
    "Oct.",
    "Nov.",
    "Dec.",
]


class ResumeTemplate(ABC):
    """Interface that every resume template must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable template name."""

    @abstractmethod
    def build(self, document: ResumeDocument, capacity: PageCapacity | None = None) -> Document:
        """Construct a PyLaTeX ``Document`` with one LaTeX page per layout page."""

    # ------------------------------------------------------------------
    # Shared helpers available to all templates
    # ------------------------------------------------------------------

    @staticmethod
    def escape_latex(text: str) -> str:
        r"""Escape LaTeX special characters in *text*.

        Handles: ``& % $ # _ { } ~ ^ \``
        """
        return _LATEX_SPECIAL.sub(lambda m: _LATEX_REPLACEMENTS[m.group(0)], text)

    @staticmethod
    def format_date_range(start: str | None, end: str | None) -> str:
        """Return a range like ``Aug. 2018 -- May 2021``.

        ISO dates (``YYYY-MM`` or ``YYYY-MM-DD``) are abbreviated; anything
        else, such as ``Jan 2016`` or ``Present``, is kept as written.
        """

        def _fmt(value: str | None) -> str:
            if not value:
                return ""
            match = _ISO_DATE.match(value.strip())
            if match is None:
                return value.strip()
            month = int(match.group(2))
            if not 1 <= month <= 12:
                return match.group(1)
            return f"{_MONTH_ABBR[month]} {match.group(1)}"

        start_str = _fmt(start)
        end_str = _fmt(end)
        if start_str and end_str:
            return f"{start_str} -- {end_str}"
        return start_str or end_str or ""

    @staticmethod
    def _strip_protocol(url: str) -> str:
        return re.sub(r"^https?://", "", url).rstrip("/")
