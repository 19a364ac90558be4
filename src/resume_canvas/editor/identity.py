"""Project identity: a local draft or a server-issued id.

``LocalProjectId | PersistedProjectId`` replaces sentinel strings such as
``""`` or ``"undefined"``. Whether a project is new is a type check.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from urllib.parse import urlencode

from resume_canvas.constants.canvas_constants import EDITOR_PATH, PROJECT_QUERY_PARAM

__all__ = [
    "LocalProjectId",
    "PersistedProjectId",
    "ProjectIdentity",
    "ProjectLocator",
    "new_local_identity",
    "parse_project_reference",
]

# Server ids are opaque, but a usable reference is a single URL-safe token.
_REFERENCE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")
_SENTINELS = frozenset({"undefined", "null", "none"})


@dataclass(frozen=True)
class LocalProjectId:
    token: str


@dataclass(frozen=True)
class PersistedProjectId:
    server_id: str


ProjectIdentity = LocalProjectId | PersistedProjectId


def new_local_identity() -> LocalProjectId:
    return LocalProjectId(f"local-{uuid.uuid4().hex}")


def parse_project_reference(reference: str | None) -> ProjectIdentity:
    """Map an externally supplied project reference to an identity.

    Missing, blank, sentinel or malformed references start a new local
    project instead of raising.
    """
    if reference is None:
        return new_local_identity()
    candidate = reference.strip()
    if not candidate or candidate.lower() in _SENTINELS:
        return new_local_identity()
    if not _REFERENCE_PATTERN.match(candidate):
        return new_local_identity()
    return PersistedProjectId(candidate)


@dataclass(frozen=True)
class ProjectLocator:
    """Identity plus the address that reloads it, always replaced together."""

    identity: ProjectIdentity
    address: str

    @classmethod
    def for_identity(cls, identity: ProjectIdentity) -> ProjectLocator:
        if isinstance(identity, PersistedProjectId):
            query = urlencode({PROJECT_QUERY_PARAM: identity.server_id})
            return cls(identity, f"{EDITOR_PATH}?{query}")
        return cls(identity, EDITOR_PATH)

    @property
    def is_persisted(self) -> bool:
        return isinstance(self.identity, PersistedProjectId)
