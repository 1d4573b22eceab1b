"""Add/Edit asset forms.

State per form instance:

    IDLE -> EDITING -> (DECODING -> EDITING) -> SUBMITTING -> CLOSED
                                                     \\-> EDITING (error set)

A failed save keeps the form open with `error` filled in so the user can
retry; a successful one merges the returned record into the list view.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional

from console.api_client import ApiError, Asset, AssetApiClient
from console.asset_list import AssetListView
from console.vin_decode import (
    INVALID_VIN_MESSAGE,
    VinDecodeClient,
    VinDecodeError,
    is_valid_vin_length,
    normalize_vin,
)

logger = logging.getLogger(__name__)

ASSET_TYPES = ("Truck", "Loader", "Skid", "Attachment", "Trailer", "Salter")
METER_UNITS = ("MILES", "HOURS")
STATUSES = ("ACTIVE", "IN_SHOP", "OUT_OF_SERVICE", "RETIRED")


class FormState(str, Enum):
    IDLE = "IDLE"
    EDITING = "EDITING"
    DECODING = "DECODING"
    SUBMITTING = "SUBMITTING"
    CLOSED = "CLOSED"


class FormStateError(RuntimeError):
    """Raised when an action is not allowed in the form's current state."""
    pass


@dataclass
class AssetFormData:
    """Raw field values as typed into the form."""

    code: str = ""
    name: str = ""
    asset_type: str = "Truck"
    vin: str = ""
    plate: str = ""
    year: str = ""
    make: str = ""
    model: str = ""
    meter_unit: str = "MILES"
    status: str = "ACTIVE"
    current_meter: str = ""

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetFormData":
        def text(key: str, default: str = "") -> str:
            value = asset.get(key)
            return default if value is None else str(value)

        return cls(
            code=text("code"),
            name=text("name"),
            asset_type=text("assetType", "Truck"),
            vin=text("vin"),
            plate=text("plate"),
            year=text("year"),
            make=text("make"),
            model=text("model"),
            meter_unit=text("meterUnit", "MILES"),
            status=text("status", "ACTIVE"),
            current_meter=text("currentMeter"),
        )

    def validate(self) -> Optional[str]:
        """First problem found, or None when the form can be submitted."""
        if not self.code.strip() or not self.name.strip():
            return "Code and Name are required."
        vin = normalize_vin(self.vin)
        if vin and not is_valid_vin_length(vin):
            return INVALID_VIN_MESSAGE
        if self.year.strip() and not _is_number(self.year):
            return "Year must be a number."
        if self.current_meter.strip() and not _is_number(self.current_meter):
            return "Meter must be a number."
        return None

    def create_payload(self) -> dict[str, Any]:
        return {
            "code": self.code.strip(),
            "name": self.name.strip(),
            "assetType": self.asset_type,
            "vin": normalize_vin(self.vin),
            "plate": self.plate.strip().upper(),
            "year": self.year.strip(),
            "make": self.make.strip(),
            "model": self.model.strip(),
            "meterUnit": self.meter_unit,
        }

    def patch_payload(self) -> dict[str, Any]:
        meter = self.current_meter.strip()
        return {
            **self.create_payload(),
            "status": self.status,
            "currentMeter": float(meter) if meter else None,
        }


def _is_number(value: str) -> bool:
    try:
        number = float(value.strip())
    except ValueError:
        return False
    return math.isfinite(number)


class _AssetForm(ABC):
    def __init__(
        self,
        api: AssetApiClient,
        list_view: Optional[AssetListView] = None,
        vin_client: Optional[VinDecodeClient] = None,
    ) -> None:
        self.api = api
        self.list_view = list_view
        self.vin_client = vin_client or VinDecodeClient()
        self.state = FormState.IDLE
        self.data = AssetFormData()
        self.error: Optional[str] = None
        self.vin_error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.state in (FormState.EDITING, FormState.DECODING, FormState.SUBMITTING)

    def _require(self, *states: FormState) -> None:
        if self.state not in states:
            raise FormStateError(f"Form is {self.state.value}, expected {' or '.join(s.value for s in states)}")

    def set_field(self, field: str, value: Any) -> None:
        self._require(FormState.EDITING)
        if not hasattr(self.data, field):
            raise AttributeError(f"Unknown asset form field: {field}")
        text = "" if value is None else str(value)
        if field == "vin":
            text = normalize_vin(text)
        self.data = replace(self.data, **{field: text})

    def close(self) -> None:
        self.state = FormState.CLOSED

    async def decode_vin(self) -> bool:
        """
        Fill year/make/model from the VIN. Name is filled only when empty.
        Never blocks saving: on failure only `vin_error` is set.
        """
        self._require(FormState.EDITING)
        self.vin_error = None
        self.state = FormState.DECODING
        try:
            result = await self.vin_client.decode(self.data.vin)
        except VinDecodeError as exc:
            self.vin_error = str(exc)
            return False
        finally:
            self.state = FormState.EDITING

        self.data = replace(
            self.data,
            vin=result.vin,
            year=result.year,
            make=result.make,
            model=result.model,
            name=self.data.name or f"{result.make} {result.model}".strip(),
        )
        return True

    @abstractmethod
    async def _save(self) -> Asset:
        ...

    @abstractmethod
    def _merge(self, asset: Asset) -> None:
        ...

    async def submit(self) -> Optional[Asset]:
        """Save the form. Returns the stored record, or None if the form stays open."""
        self._require(FormState.EDITING)
        problem = self.data.validate()
        if problem:
            self.error = problem
            return None

        self.error = None
        self.state = FormState.SUBMITTING
        try:
            asset = await self._save()
        except ApiError as exc:
            logger.warning("Asset save failed: %s", exc)
            self.error = str(exc)
            self.state = FormState.EDITING
            return None
        except Exception as exc:
            # leave the form editable before propagating
            logger.exception("Unexpected error while saving asset")
            self.error = str(exc) or exc.__class__.__name__
            self.state = FormState.EDITING
            raise

        if self.list_view is not None:
            self._merge(asset)
        self.state = FormState.CLOSED
        return asset

    def snapshot(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "fields": asdict(self.data),
            "error": self.error,
            "vinError": self.vin_error,
        }


class AddAssetForm(_AssetForm):
    def open(self) -> None:
        self.data = AssetFormData()
        self.error = None
        self.vin_error = None
        self.state = FormState.EDITING

    async def _save(self) -> Asset:
        return await self.api.create_asset(self.data.create_payload())

    def _merge(self, asset: Asset) -> None:
        self.list_view.merge_created(asset)


class EditAssetForm(_AssetForm):
    def __init__(
        self,
        api: AssetApiClient,
        list_view: Optional[AssetListView] = None,
        vin_client: Optional[VinDecodeClient] = None,
    ) -> None:
        super().__init__(api, list_view, vin_client)
        self.source: Optional[Asset] = None

    def sync(self, asset: Optional[Asset]) -> None:
        """
        Follow the selected asset. Any change of reference re-populates the
        form and drops unsaved edits and errors. The same reference is a no-op
        while the form is open; a closed form is reopened from it.
        """
        if asset is self.source and (asset is None or self.is_open):
            return
        self.source = asset
        self.error = None
        self.vin_error = None
        if asset is None:
            self.data = AssetFormData()
            self.state = FormState.IDLE
            return
        self.data = AssetFormData.from_asset(asset)
        self.state = FormState.EDITING

    async def _save(self) -> Asset:
        if self.source is None:
            raise FormStateError("No asset selected")
        return await self.api.update_asset(self.source["id"], self.data.patch_payload())

    def _merge(self, asset: Asset) -> None:
        self.list_view.merge_updated(asset)
