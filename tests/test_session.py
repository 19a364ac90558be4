"""Tests for mounting, loading and saving an editor session."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from resume_canvas.config import EditorSettings
from resume_canvas.constants.canvas_constants import DEFAULT_PROJECT_NAME, ElementType
from resume_canvas.editor.autosave import SaveOutcome
from resume_canvas.editor.identity import LocalProjectId, PersistedProjectId
from resume_canvas.editor.interaction import Selected
from resume_canvas.editor.session import EditorSession
from resume_canvas.editor.snapshot import default_elements
from resume_canvas.services.project_gateway import (
    GatewayError,
    HttpProjectGateway,
    SavedProject,
)

SETTINGS = EditorSettings(quiescence_seconds=0.1)


class StubGateway:
    def __init__(self, projects: dict[str, SavedProject] | None = None) -> None:
        self.projects = dict(projects or {})
        self.fail_saves = False
        self.created: list[dict[str, Any]] = []
        self.updated: list[tuple[str, dict[str, Any]]] = []

    async def create(self, payload: dict[str, Any]) -> SavedProject:
        if self.fail_saves:
            raise GatewayError(None, "Connection refused")
        self.created.append(payload)
        saved = SavedProject(id="new1", name=payload["name"], data=payload["data"])
        self.projects[saved.id] = saved
        return saved

    async def update(self, project_id: str, payload: dict[str, Any]) -> SavedProject:
        if self.fail_saves:
            raise GatewayError(500, "Failed to update project.")
        self.updated.append((project_id, payload))
        saved = SavedProject(id=project_id, name=payload["name"], data=payload["data"])
        self.projects[project_id] = saved
        return saved

    async def fetch(self, project_id: str) -> SavedProject:
        try:
            return self.projects[project_id]
        except KeyError:
            raise GatewayError(404, "Project not found.") from None

    async def list_projects(self) -> list[SavedProject]:
        return list(self.projects.values())

    async def delete(self, project_id: str) -> None:
        self.projects.pop(project_id, None)


def _stored_project() -> SavedProject:
    return SavedProject(
        id="abc123",
        name="Backend CV",
        description="For API roles",
        data={
            "version": 1,
            "elements": [
                {
                    "id": "t1",
                    "type": "text",
                    "content": "Jane Doe",
                    "style": {"font_size": 28},
                    "position": {"x": 40, "y": 40},
                    "z_index": 5,
                }
            ],
        },
    )


def test_open_without_reference_starts_local_project():
    async def scenario():
        session = await EditorSession.open(StubGateway(), None, settings=SETTINGS)
        session.close()
        return session

    session = asyncio.run(scenario())
    assert isinstance(session.locator.identity, LocalProjectId)
    assert session.address == "/editor"
    assert session.store.name == DEFAULT_PROJECT_NAME
    assert session.store.elements == ()
    assert session.notice is None


def test_open_existing_project_loads_elements():
    async def scenario():
        gateway = StubGateway({"abc123": _stored_project()})
        session = await EditorSession.open(gateway, "abc123", settings=SETTINGS)
        session.close()
        return session

    session = asyncio.run(scenario())
    assert session.locator.identity == PersistedProjectId("abc123")
    assert session.address == "/editor?project=abc123"
    assert session.store.name == "Backend CV"
    assert session.store.description == "For API roles"
    assert [element.content for element in session.store.elements] == ["Jane Doe"]
    assert session.store.next_z_index == 6
    assert session.last_edited_project_id == "abc123"


def test_open_with_malformed_data_uses_default_elements():
    async def scenario():
        broken = SavedProject(id="abc123", name="Broken", data={"elements": [{"id": 1}]})
        session = await EditorSession.open(
            StubGateway({"abc123": broken}), "abc123", settings=SETTINGS
        )
        session.close()
        return session

    session = asyncio.run(scenario())
    assert list(session.store.elements) == default_elements()
    assert session.locator.is_persisted


def test_open_unknown_project_falls_back_to_local_with_notice():
    async def scenario():
        session = await EditorSession.open(StubGateway(), "doesnotexist", settings=SETTINGS)
        session.close()
        return session

    session = asyncio.run(scenario())
    assert not session.locator.is_persisted
    assert session.notice is not None
    assert session.notice.level == "error"


@pytest.mark.parametrize(
    ("body", "content_type"),
    [
        (b'{"name": "No id"}', "application/json"),
        (b"", "application/json"),
        (b"<html>maintenance</html>", "text/html"),
        (b"[1, 2]", "application/json"),
    ],
)
def test_open_unreadable_project_falls_back_to_local(body: bytes, content_type: str):
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body, headers={"content-type": content_type})

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(respond)) as client:
            gateway = HttpProjectGateway("alice", base_url="http://cv.test/api", client=client)
            session = await EditorSession.open(gateway, "abc123", settings=SETTINGS)
            session.close()
            return session

    session = asyncio.run(scenario())
    assert isinstance(session.locator.identity, LocalProjectId)
    assert session.store.elements == ()
    assert session.notice is not None
    assert session.notice.level == "error"


def test_manual_save_promotes_and_reports_success():
    async def scenario():
        gateway = StubGateway()
        session = await EditorSession.open(gateway, "undefined", settings=SETTINGS)
        element = session.store.add_element(ElementType.TEXT)
        session.controller.click_element(element.id)
        outcome = await session.save()
        state = session.controller.state
        session.close()
        return session, outcome, state, gateway

    session, outcome, state, gateway = asyncio.run(scenario())
    assert outcome is SaveOutcome.SAVED
    assert session.notice.level == "success"
    assert session.address == "/editor?project=new1"
    assert session.last_edited_project_id == "new1"
    assert len(gateway.created) == 1
    assert isinstance(state, Selected)


def test_manual_save_failure_sets_dismissible_notice():
    async def scenario():
        gateway = StubGateway({"abc123": _stored_project()})
        session = await EditorSession.open(gateway, "abc123", settings=SETTINGS)
        gateway.fail_saves = True
        session.store.rename("Renamed")
        outcome = await session.save()
        notice = session.notice
        session.dismiss_notice()
        session.close()
        return outcome, notice, session

    outcome, notice, session = asyncio.run(scenario())
    assert outcome is SaveOutcome.FAILED
    assert notice.level == "error"
    assert notice.dismissible is True
    assert notice.message.startswith("Save failed:")
    assert session.notice is None


def test_close_stops_autosave():
    async def scenario():
        gateway = StubGateway()
        session = await EditorSession.open(gateway, settings=SETTINGS)
        session.store.add_element(ElementType.TEXT)
        session.close()
        await asyncio.sleep(0.3)
        return gateway

    gateway = asyncio.run(scenario())
    assert gateway.created == []
