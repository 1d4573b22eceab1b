"""App shell: which screen is showing, the global search box, and the
stub screens that render sample data."""

from __future__ import annotations

from typing import Any, Optional

from console import mock_data
from console.api_client import AssetApiClient
from console.asset_forms import AddAssetForm, EditAssetForm
from console.asset_list import AssetListView
from console.vin_decode import VinDecodeClient

ROUTES = ("dashboard", "assets", "inspections", "pm", "wos", "parts", "drivers", "settings")


def dashboard_summary() -> dict[str, Any]:
    assets = mock_data.MOCK_ASSETS
    return {
        "activeAssets": sum(1 for a in assets if a["status"] == "ACTIVE"),
        "inShop": sum(1 for a in assets if a["status"] == "IN_SHOP"),
        "outOfService": sum(1 for a in assets if a["status"] == "OUT_OF_SERVICE"),
        "pmDue": sum(1 for p in mock_data.MOCK_PM if p["dueIn"] <= 0),
        "openWorkOrders": sum(1 for w in mock_data.MOCK_WORK_ORDERS if w["status"] != "CLOSED"),
        "pmDueSoon": mock_data.MOCK_PM,
        "recentInspections": mock_data.MOCK_INSPECTIONS,
        "workOrders": mock_data.MOCK_WORK_ORDERS,
    }


_STUB_VIEWS = {
    "dashboard": dashboard_summary,
    "inspections": lambda: {
        "submissions": mock_data.MOCK_INSPECTIONS,
        "forms": mock_data.INSPECTION_FORMS,
    },
    "pm": lambda: {"due": mock_data.MOCK_PM},
    "wos": lambda: {"workOrders": mock_data.MOCK_WORK_ORDERS},
    "parts": lambda: {"parts": mock_data.MOCK_PARTS},
    "drivers": lambda: {"drivers": mock_data.MOCK_DRIVERS},
    "settings": lambda: {"sections": mock_data.SETTINGS_SECTIONS},
}


class AppShell:
    """
    Route switch for the console. The assets screen is the only live one;
    its list view is created with the shell and refreshed on every visit.
    """

    def __init__(
        self,
        api: Optional[AssetApiClient] = None,
        vin_client: Optional[VinDecodeClient] = None,
    ) -> None:
        self.api = api or AssetApiClient()
        vin_client = vin_client or VinDecodeClient()
        self.route = "dashboard"
        self.search = ""
        self.assets = AssetListView(self.api)
        self.add_form = AddAssetForm(self.api, self.assets, vin_client)
        self.edit_form = EditAssetForm(self.api, self.assets, vin_client)

    async def navigate(self, route: str) -> None:
        if route not in ROUTES:
            raise ValueError(f"Unknown route: {route}")
        self.route = route
        if route == "assets":
            await self.assets.refresh()

    def set_search(self, term: str) -> None:
        self.search = term or ""
        self.assets.set_search(self.search)

    def open_asset(self, asset_id: Any) -> EditAssetForm:
        """Select a row and point the edit form at it."""
        self.edit_form.sync(self.assets.select(asset_id))
        return self.edit_form

    def render(self) -> dict[str, Any]:
        if self.route == "assets":
            view: dict[str, Any] = {
                "assets": self.assets.visible,
                "loading": self.assets.loading,
                "error": self.assets.error,
                "addForm": self.add_form.snapshot() if self.add_form.is_open else None,
                "editForm": self.edit_form.snapshot() if self.edit_form.is_open else None,
            }
        else:
            view = _STUB_VIEWS[self.route]()
        return {"route": self.route, "search": self.search, "view": view}
