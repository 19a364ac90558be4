"""Distribute resume entries across fixed-capacity pages.

Page 1 takes up to each category's own capacity. Continuation pages
follow a priority order:

1. Education fills up to its capacity.
2. Experience only gets the education headroom left on that page
   (``capacity.education - education placed on the page``).
3. Projects are placed only once every education entry has been placed.

Pages never reorder or drop entries: concatenating a category's slices
across pages gives back the original sequence.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from resume_canvas.constants.pagination_constants import (
    MAX_EDUCATIONS_PER_PAGE,
    MAX_EXPERIENCES_PER_PAGE,
    MAX_PROJECTS_PER_PAGE,
)
from resume_canvas.services.resume_data import EducationEntry, ExperienceEntry, ProjectEntry

__all__ = ["Page", "PageCapacity", "paginate"]


@dataclass(frozen=True)
class PageCapacity:
    experience: int = MAX_EXPERIENCES_PER_PAGE
    education: int = MAX_EDUCATIONS_PER_PAGE
    projects: int = MAX_PROJECTS_PER_PAGE

    def __post_init__(self) -> None:
        for name in ("experience", "education", "projects"):
            if getattr(self, name) < 1:
                msg = f"Page capacity for {name} must be at least 1"
                raise ValueError(msg)


@dataclass(frozen=True)
class Page:
    experiences: tuple[ExperienceEntry, ...] = ()
    education: tuple[EducationEntry, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.experiences or self.education or self.projects)


def paginate(
    experiences: Sequence[ExperienceEntry],
    education: Sequence[EducationEntry],
    projects: Sequence[ProjectEntry],
    capacity: PageCapacity | None = None,
) -> list[Page]:
    """Split the three entry lists into an ordered list of pages.

    The first page is always returned, even when every list is empty.
    """
    capacity = capacity or PageCapacity()

    exp_next = min(len(experiences), capacity.experience)
    edu_next = min(len(education), capacity.education)
    proj_next = min(len(projects), capacity.projects)
    pages = [
        Page(
            experiences=tuple(experiences[:exp_next]),
            education=tuple(education[:edu_next]),
            projects=tuple(projects[:proj_next]),
        )
    ]

    while exp_next < len(experiences) or edu_next < len(education) or proj_next < len(projects):
        edu_count = min(len(education) - edu_next, capacity.education)
        page_education = education[edu_next : edu_next + edu_count]
        edu_next += edu_count

        headroom = capacity.education - edu_count
        exp_count = min(len(experiences) - exp_next, headroom)
        page_experiences = experiences[exp_next : exp_next + exp_count]
        exp_next += exp_count

        page_projects: Sequence[ProjectEntry] = ()
        if edu_next == len(education):
            proj_count = min(len(projects) - proj_next, capacity.projects)
            page_projects = projects[proj_next : proj_next + proj_count]
            proj_next += proj_count

        page = Page(
            experiences=tuple(page_experiences),
            education=tuple(page_education),
            projects=tuple(page_projects),
        )
        if not page.is_empty:
            pages.append(page)

    return pages
