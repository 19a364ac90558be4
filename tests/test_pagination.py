"""Tests for distributing resume entries across pages."""

from __future__ import annotations

import itertools

import pytest

from resume_canvas.services.pagination import Page, PageCapacity, paginate
from resume_canvas.services.resume_data import EducationEntry, ExperienceEntry, ProjectEntry


def _experiences(count: int) -> list[ExperienceEntry]:
    return [ExperienceEntry(company=f"Company {i}", position="Engineer") for i in range(count)]


def _education(count: int) -> list[EducationEntry]:
    return [EducationEntry(institution=f"School {i}", degree="BSc") for i in range(count)]


def _projects(count: int) -> list[ProjectEntry]:
    return [ProjectEntry(name=f"Project {i}") for i in range(count)]


def test_empty_input_yields_single_empty_page():
    pages = paginate([], [], [])
    assert pages == [Page()]
    assert pages[0].is_empty


def test_everything_fits_on_first_page():
    experiences, education, projects = _experiences(3), _education(3), _projects(2)
    pages = paginate(experiences, education, projects)
    assert len(pages) == 1
    assert list(pages[0].experiences) == experiences
    assert list(pages[0].education) == education
    assert list(pages[0].projects) == projects


def test_five_experiences_split_three_then_two():
    experiences = _experiences(5)

    pages = paginate(experiences, [], [], PageCapacity(experience=3))

    assert [len(page.experiences) for page in pages] == [3, 2]
    assert all(not page.education and not page.projects for page in pages)
    assert list(pages[1].experiences) == experiences[3:]


def test_education_overflow_leaves_exhausted_experience_alone():
    experiences, education = _experiences(2), _education(4)

    pages = paginate(experiences, education, [], PageCapacity(experience=3, education=3))

    assert len(pages) == 2
    assert list(pages[0].education) == education[:3]
    assert list(pages[0].experiences) == experiences
    assert list(pages[1].education) == education[3:]
    assert pages[1].experiences == ()
    assert pages[1].projects == ()


def test_continuation_experience_only_uses_education_headroom():
    experiences, education = _experiences(8), _education(4)

    pages = paginate(experiences, education, [])

    # Page 2: one education entry leaves room for two experiences.
    assert (len(pages[1].education), len(pages[1].experiences)) == (1, 2)
    # Page 3: no education left, experience gets the full education capacity.
    assert (len(pages[2].education), len(pages[2].experiences)) == (0, 3)
    assert sum(len(page.experiences) for page in pages) == 8


def test_projects_wait_until_education_is_exhausted():
    education, projects = _education(7), _projects(5)

    pages = paginate([], education, projects)

    assert [len(page.education) for page in pages] == [3, 3, 1, 0]
    assert [len(page.projects) for page in pages] == [2, 0, 2, 1]


def test_capacity_must_be_positive():
    with pytest.raises(ValueError, match="education"):
        PageCapacity(education=0)


@pytest.mark.parametrize(
    ("n_exp", "n_edu", "n_proj", "capacity"),
    [
        (n_exp, n_edu, n_proj, capacity)
        for n_exp, n_edu, n_proj in itertools.product(
            range(0, 9, 2), range(0, 8, 3), range(0, 6, 2)
        )
        for capacity in (PageCapacity(), PageCapacity(experience=1, education=2, projects=1))
    ],
)
def test_pages_partition_each_category_in_order(n_exp, n_edu, n_proj, capacity):
    experiences, education, projects = _experiences(n_exp), _education(n_edu), _projects(n_proj)

    pages = paginate(experiences, education, projects, capacity)

    assert [e for page in pages for e in page.experiences] == experiences
    assert [e for page in pages for e in page.education] == education
    assert [p for page in pages for p in page.projects] == projects
    assert all(not page.is_empty for page in pages[1:])
    first, rest = pages[0], pages[1:]
    assert len(first.experiences) <= capacity.experience
    for page in pages:
        assert len(page.education) <= capacity.education
        assert len(page.projects) <= capacity.projects
    for page in rest:
        assert len(page.experiences) <= capacity.education - len(page.education)
