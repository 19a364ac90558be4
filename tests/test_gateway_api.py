"""Drive the HTTP clients against the in-process API."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from resume_canvas.api.main import app
from resume_canvas.config import EditorSettings
from resume_canvas.constants.canvas_constants import ElementType
from resume_canvas.editor.session import EditorSession
from resume_canvas.services.image_upload import ImageUploadClient
from resume_canvas.services.project_gateway import GatewayError, HttpProjectGateway
from resume_canvas.services.thumbnail_capture import SvgThumbnailCapture

BASE_URL = "http://testserver/api"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake"

pytestmark = pytest.mark.usefixtures("api_db")


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


def test_gateway_crud_round_trip():
    async def scenario():
        async with _client() as client:
            gateway = HttpProjectGateway("alice", base_url=BASE_URL, client=client)
            created = await gateway.create(
                {"name": "CV", "description": "", "data": {"version": 1, "elements": []}}
            )
            updated = await gateway.update(created.id, {"name": "Renamed"})
            fetched = await gateway.fetch(created.id)
            listed = await gateway.list_projects()
            await gateway.delete(created.id)
            with pytest.raises(GatewayError) as excinfo:
                await gateway.fetch(created.id)
            return created, updated, fetched, listed, excinfo.value

    created, updated, fetched, listed, error = asyncio.run(scenario())
    assert created.name == "CV"
    assert updated.name == "Renamed"
    assert fetched.data == {"version": 1, "elements": []}
    assert [project.id for project in listed] == [created.id]
    assert error.status_code == 404
    assert error.detail == "Project not found."


def test_gateway_reports_auth_failure():
    async def scenario():
        async with _client() as client:
            gateway = HttpProjectGateway("", base_url=BASE_URL, client=client)
            with pytest.raises(GatewayError) as excinfo:
                await gateway.list_projects()
            return excinfo.value

    assert asyncio.run(scenario()).status_code == 401


def test_gateway_wraps_transport_errors():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            gateway = HttpProjectGateway("alice", base_url=BASE_URL, client=client)
            with pytest.raises(GatewayError) as excinfo:
                await gateway.fetch("abc")
            return excinfo.value

    error = asyncio.run(scenario())
    assert error.status_code is None
    assert "Connection refused" in error.detail


def test_editor_session_saves_and_reloads_through_api():
    settings = EditorSettings(quiescence_seconds=0.1)

    async def scenario():
        async with _client() as client:
            gateway = HttpProjectGateway("alice", base_url=BASE_URL, client=client)
            session = await EditorSession.open(
                gateway, None, SvgThumbnailCapture(), settings=settings
            )
            element = session.store.add_element(ElementType.TEXT)
            session.store.update_text_content(element.id, "Jane Doe")
            session.store.rename("Autosaved CV")
            await asyncio.sleep(0.3)
            await session.autosave.wait_idle()
            session.close()

            reopened = await EditorSession.open(
                gateway, session.locator.identity.server_id, settings=settings
            )
            reopened.close()
            listed = await gateway.list_projects()
            return session, reopened, listed

    session, reopened, listed = asyncio.run(scenario())
    assert session.locator.is_persisted
    assert reopened.locator == session.locator
    assert reopened.store.name == "Autosaved CV"
    assert [e.content for e in reopened.store.elements] == ["Jane Doe"]
    assert len(listed) == 1
    assert listed[0].thumbnail.url.startswith("data:image/svg+xml;base64,")


def test_image_upload_client():
    async def scenario():
        async with _client() as client:
            uploads = ImageUploadClient("alice", base_url=BASE_URL, client=client)
            uploaded = await uploads.upload("photo.png", PNG_BYTES, "image/png")
            await uploads.delete(uploaded.public_id)
            with pytest.raises(GatewayError) as excinfo:
                await uploads.delete(uploaded.public_id)
            return uploaded, excinfo.value

    uploaded, error = asyncio.run(scenario())
    assert uploaded.url.endswith(uploaded.public_id)
    assert error.status_code == 404


def test_unreadable_success_responses_raise_gateway_error():
    def respond(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/uploads/images"):
            return httpx.Response(201, json={"url": "http://cv.test/x"})
        if request.method == "GET":
            return httpx.Response(200, json={"id": "abc"})
        return httpx.Response(201, content=b"not json")

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(respond)) as client:
            gateway = HttpProjectGateway("alice", base_url=BASE_URL, client=client)
            uploads = ImageUploadClient("alice", base_url=BASE_URL, client=client)
            errors = []
            for call in (
                lambda: gateway.create({"name": "CV"}),
                gateway.list_projects,
                lambda: uploads.upload("photo.png", PNG_BYTES, "image/png"),
            ):
                with pytest.raises(GatewayError) as excinfo:
                    await call()
                errors.append(excinfo.value)
            return errors

    created, listed, uploaded = asyncio.run(scenario())
    assert created.status_code == 201
    assert "not valid JSON" in created.detail
    assert listed.status_code == 200
    assert uploaded.status_code == 201


def test_clients_close_only_their_own_http_client():
    async def scenario():
        async with _client() as shared:
            await HttpProjectGateway("alice", base_url=BASE_URL, client=shared).aclose()
            await ImageUploadClient("alice", base_url=BASE_URL, client=shared).aclose()
            shared_open = not shared.is_closed

        owned = ImageUploadClient("alice", base_url=BASE_URL)
        await owned.aclose()
        return shared_open, owned._client.is_closed

    shared_open, owned_closed = asyncio.run(scenario())
    assert shared_open
    assert owned_closed
