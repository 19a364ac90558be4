from __future__ import annotations

import pytest

from resume_canvas.editor.identity import (
    LocalProjectId,
    PersistedProjectId,
    ProjectLocator,
    new_local_identity,
    parse_project_reference,
)


@pytest.mark.parametrize(
    "reference",
    [None, "", "   ", "undefined", "null", "None", "../etc/passwd", "a b", "x" * 129],
)
def test_missing_or_invalid_reference_starts_local_project(reference):
    identity = parse_project_reference(reference)
    assert isinstance(identity, LocalProjectId)
    assert identity.token.startswith("local-")


@pytest.mark.parametrize("reference", ["abc123", "3f2a9c0e4b1d4e8f9a7b6c5d4e3f2a1b", " p-1_x "])
def test_well_formed_reference_is_persisted(reference):
    assert parse_project_reference(reference) == PersistedProjectId(reference.strip())


def test_local_identities_are_unique():
    assert new_local_identity() != new_local_identity()


def test_locator_address_tracks_identity():
    local = ProjectLocator.for_identity(new_local_identity())
    persisted = ProjectLocator.for_identity(PersistedProjectId("abc123"))

    assert local.address == "/editor"
    assert not local.is_persisted
    assert persisted.address == "/editor?project=abc123"
    assert persisted.is_persisted
