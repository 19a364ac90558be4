"""Per-page entry capacities for the paginated resume layout."""

from __future__ import annotations

MAX_EXPERIENCES_PER_PAGE = 3
MAX_EDUCATIONS_PER_PAGE = 3
MAX_PROJECTS_PER_PAGE = 2
