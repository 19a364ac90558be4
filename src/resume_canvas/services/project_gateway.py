"""Client for the canvas project persistence API.

The editor core only depends on the :class:`ProjectGateway` protocol;
:class:`HttpProjectGateway` is the production implementation. The caller's
credential is attached as an opaque bearer token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from resume_canvas.config import get_api_url
from resume_canvas.services.thumbnail_capture import Thumbnail

logger = logging.getLogger(__name__)

__all__ = [
    "GatewayError",
    "HttpProjectGateway",
    "ProjectGateway",
    "SavedProject",
    "error_detail",
]

DEFAULT_TIMEOUT_SECONDS = 10.0


class GatewayError(Exception):
    """The persistence API could not be reached or rejected the request."""

    def __init__(self, status_code: int | None, detail: str) -> None:
        super().__init__(f"{status_code or 'network'}: {detail}")
        self.status_code = status_code
        self.detail = detail


@dataclass(frozen=True)
class SavedProject:
    """A project as returned by the persistence API."""

    id: str
    name: str
    description: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    thumbnail: Thumbnail | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_json(cls, body: Any) -> SavedProject:
        """Build a project from a decoded response body.

        Raises:
            ValueError: If *body* is not a project object with an ``id``.
        """
        if not isinstance(body, dict) or not body.get("id"):
            msg = "Response body is not a project"
            raise ValueError(msg)
        thumbnail = body.get("thumbnail")
        return cls(
            id=str(body["id"]),
            name=body.get("name") or "",
            description=body.get("description") or "",
            data=body.get("data") if isinstance(body.get("data"), dict) else {},
            thumbnail=(
                Thumbnail(url=thumbnail.get("url", ""), public_id=thumbnail.get("public_id", ""))
                if isinstance(thumbnail, dict)
                else None
            ),
            created_at=body.get("created_at"),
            updated_at=body.get("updated_at"),
        )


class ProjectGateway(Protocol):
    async def create(self, payload: dict[str, Any]) -> SavedProject: ...

    async def update(self, project_id: str, payload: dict[str, Any]) -> SavedProject: ...

    async def fetch(self, project_id: str) -> SavedProject: ...

    async def list_projects(self) -> list[SavedProject]: ...

    async def delete(self, project_id: str) -> None: ...


class HttpProjectGateway:
    """:class:`ProjectGateway` over HTTP using ``httpx.AsyncClient``."""

    def __init__(
        self,
        credential: str,
        *,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = (base_url or get_api_url()).rstrip("/")
        self._credential = credential
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def create(self, payload: dict[str, Any]) -> SavedProject:
        return await self._request_project("POST", "/projects", payload)

    async def update(self, project_id: str, payload: dict[str, Any]) -> SavedProject:
        return await self._request_project("PUT", f"/projects/{project_id}", payload)

    async def fetch(self, project_id: str) -> SavedProject:
        return await self._request_project("GET", f"/projects/{project_id}")

    async def list_projects(self) -> list[SavedProject]:
        response = await self._request("GET", "/projects")
        body = _decode(response)
        if not isinstance(body, list):
            raise GatewayError(response.status_code, "Response body is not a project list")
        try:
            return [SavedProject.from_json(item) for item in body]
        except ValueError as exc:
            raise GatewayError(response.status_code, str(exc)) from exc

    async def delete(self, project_id: str) -> None:
        await self._request("DELETE", f"/projects/{project_id}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request_project(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> SavedProject:
        response = await self._request(method, path, payload)
        try:
            return SavedProject.from_json(_decode(response))
        except ValueError as exc:
            logger.warning("Unreadable project response for %s %s: %s", method, path, exc)
            raise GatewayError(response.status_code, str(exc)) from exc

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method,
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self._credential}"},
            )
        except httpx.HTTPError as exc:
            raise GatewayError(None, str(exc) or type(exc).__name__) from exc

        if response.status_code >= 400:
            raise GatewayError(response.status_code, error_detail(response))
        return response


def _decode(response: httpx.Response) -> Any:
    if response.status_code == httpx.codes.NO_CONTENT or not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise GatewayError(response.status_code, "Response body is not valid JSON") from exc


def error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)
