"""Asset list screen: the fetched assets, the search box, the selected row."""

from __future__ import annotations

import logging
from typing import Any, Optional

from console.api_client import ApiError, Asset, AssetApiClient

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("code", "name", "assetType", "make", "model", "status")


def _haystack(asset: Asset) -> str:
    return " ".join(str(asset.get(f) or "") for f in SEARCH_FIELDS).lower()


def filter_assets(assets: list[Asset], query: Optional[str]) -> list[Asset]:
    """
    Case-insensitive substring match over code, name, type, make, model
    and status. A blank query matches everything.
    """
    q = (query or "").strip().lower()
    if not q:
        return list(assets)
    return [a for a in assets if q in _haystack(a)]


class AssetListView:
    """
    Owns the asset list of one screen instance. Nothing else writes to it:
    forms hand their saved records back through the merge_* methods.
    """

    def __init__(self, api: AssetApiClient) -> None:
        self.api = api
        self.assets: list[Asset] = []
        self.search = ""
        self.selected: Optional[Asset] = None
        self.loading = False
        self.error: Optional[str] = None

    @property
    def visible(self) -> list[Asset]:
        return filter_assets(self.assets, self.search)

    def set_search(self, term: str) -> None:
        self.search = term or ""

    async def refresh(self) -> bool:
        """Fetch the full list. On failure the previous list stays on screen."""
        self.loading = True
        try:
            assets = await self.api.list_assets()
        except ApiError as exc:
            logger.warning("Asset list fetch failed: %s", exc)
            self.error = str(exc)
            return False
        finally:
            self.loading = False
        self.assets = list(assets)
        self.error = None
        if self.selected is not None:
            self.selected = self.find(self.selected.get("id"))
        return True

    def find(self, asset_id: Any) -> Optional[Asset]:
        for asset in self.assets:
            if asset.get("id") == asset_id:
                return asset
        return None

    def select(self, asset_id: Any) -> Optional[Asset]:
        self.selected = self.find(asset_id)
        return self.selected

    def merge_created(self, asset: Asset) -> None:
        self.assets = [asset] + [a for a in self.assets if a.get("id") != asset.get("id")]

    def merge_updated(self, asset: Asset) -> None:
        asset_id = asset.get("id")
        self.assets = [asset if a.get("id") == asset_id else a for a in self.assets]
        if self.selected is not None and self.selected.get("id") == asset_id:
            self.selected = asset

    def remove(self, asset_id: Any) -> None:
        self.assets = [a for a in self.assets if a.get("id") != asset_id]
        if self.selected is not None and self.selected.get("id") == asset_id:
            self.selected = None

    async def delete(self, asset_id: Any) -> bool:
        """Delete on the server, then drop the row locally. Failures set `error`."""
        try:
            await self.api.delete_asset(asset_id)
        except ApiError as exc:
            logger.warning("Asset delete failed for %s: %s", asset_id, exc)
            self.error = str(exc)
            return False
        self.remove(asset_id)
        self.error = None
        return True
