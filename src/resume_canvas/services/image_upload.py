"""Client for the image upload endpoint used by image elements."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from resume_canvas.config import get_api_url
from resume_canvas.services.project_gateway import GatewayError, error_detail

__all__ = ["ImageUploadClient", "UploadedImage"]


@dataclass(frozen=True)
class UploadedImage:
    url: str
    public_id: str


class ImageUploadClient:
    def __init__(
        self,
        credential: str,
        *,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or get_api_url()).rstrip("/")
        self._headers = {"Authorization": f"Bearer {credential}"}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def upload(
        self, filename: str, data: bytes, content_type: str | None = None
    ) -> UploadedImage:
        files = {"file": (filename, data, content_type or "application/octet-stream")}
        try:
            response = await self._client.post(
                f"{self.base_url}/uploads/images", files=files, headers=self._headers
            )
        except httpx.HTTPError as exc:
            raise GatewayError(None, str(exc) or type(exc).__name__) from exc
        if response.status_code >= 400:
            raise GatewayError(response.status_code, error_detail(response))
        try:
            body = response.json()
            return UploadedImage(url=str(body["url"]), public_id=str(body["public_id"]))
        except (ValueError, KeyError, TypeError) as exc:
            detail = "Response body is not an uploaded image"
            raise GatewayError(response.status_code, detail) from exc

    async def delete(self, public_id: str) -> None:
        try:
            response = await self._client.delete(
                f"{self.base_url}/uploads/images/{public_id}", headers=self._headers
            )
        except httpx.HTTPError as exc:
            raise GatewayError(None, str(exc) or type(exc).__name__) from exc
        if response.status_code >= 400:
            raise GatewayError(response.status_code, error_detail(response))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
