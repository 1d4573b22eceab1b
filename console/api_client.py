"""
console/api_client.py
Async client for the asset endpoints.

Every console view goes through this client, so error handling is the same
everywhere: non-2xx answers and transport failures become ApiError carrying
the server's `error` message (or a readable fallback).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)

Asset = dict[str, Any]


class ApiError(Exception):
    """Raised when an API call fails. `status_code` is None for network errors."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AssetApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 20.0,
    ) -> None:
        self._base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._transport = transport
        self._timeout = timeout

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                transport=self._transport,
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            ) as client:
                r = await client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"Cannot reach the fleet API: {exc}") from exc

        if r.status_code >= 400:
            raise ApiError(_error_message(r, method), status_code=r.status_code)

        try:
            return r.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON from {method} {path}", status_code=r.status_code) from exc

    async def list_assets(self) -> list[Asset]:
        return await self._request("GET", "/api/assets")

    async def create_asset(self, payload: dict[str, Any]) -> Asset:
        return await self._request("POST", "/api/assets", json=payload)

    async def update_asset(self, asset_id: str, patch: dict[str, Any]) -> Asset:
        return await self._request("PATCH", f"/api/assets/{asset_id}", json=patch)

    async def delete_asset(self, asset_id: str) -> None:
        await self._request("DELETE", f"/api/assets/{asset_id}")


def _error_message(r: httpx.Response, method: str) -> str:
    fallback = {
        "PATCH": "Update failed",
        "DELETE": "Delete failed",
        "POST": "Create failed",
    }.get(method, "Request failed")
    try:
        body = r.json()
    except ValueError:
        return f"{fallback} ({r.status_code})"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"{fallback} ({r.status_code})"
