# api/assets/db_manager.py
"""
Business logic for asset management.

Create and update use separate normalization rules: create forces
status/meterUnit/currentMeter, update only touches fields present in the
request.
"""
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import Asset, AssetStatus, MeterUnit
from .models import AssetCreate, AssetPatch
from . import queries

logger = logging.getLogger(__name__)

DEFAULT_ASSET_TYPE = "Truck"
REQUIRED_FIELDS_MESSAGE = "Code and Name are required."
VIN_MIN_LENGTH = 11
VIN_MAX_LENGTH = 17

_STATUSES = {s.value for s in AssetStatus}
_METER_UNITS = {u.value for u in MeterUnit}


class AssetValidationError(Exception):
    """Raised when a payload fails validation."""
    pass


class AssetNotFoundError(Exception):
    """Raised when asset doesn't exist."""
    pass


class AssetStoreError(Exception):
    """Raised when the database rejects a write."""
    pass


# ---------- Field normalization ----------

def _text(value: str | None) -> str:
    return (value or "").strip()


def _optional_text(value: str | None) -> str | None:
    return _text(value) or None


def _optional_upper(value: str | None) -> str | None:
    cleaned = _text(value)
    return cleaned.upper() if cleaned else None


def _coerce_vin(value: str | None) -> str | None:
    vin = _optional_upper(value)
    if vin is not None and not VIN_MIN_LENGTH <= len(vin) <= VIN_MAX_LENGTH:
        raise AssetValidationError(
            f"VIN must be {VIN_MIN_LENGTH}-{VIN_MAX_LENGTH} characters, got {len(vin)}."
        )
    return vin


def _coerce_year(value: str | None) -> int | None:
    cleaned = _text(value)
    if not cleaned:
        return None
    try:
        return int(cleaned)
    except ValueError:
        pass
    try:
        number = float(cleaned)
    except ValueError:
        raise AssetValidationError(f"Year must be a number, got '{cleaned}'.") from None
    if not number.is_integer():
        raise AssetValidationError(f"Year must be a whole number, got '{cleaned}'.")
    return int(number)


def normalize_create(payload: AssetCreate) -> dict[str, Any]:
    """
    Build the column values for a new asset.

    Raises:
        AssetValidationError: If code or name is empty after trimming,
            the VIN is not 11-17 characters, or year is not numeric
    """
    data = {
        "code": _text(payload.code),
        "name": _text(payload.name),
        "asset_type": _text(payload.asset_type) or DEFAULT_ASSET_TYPE,
        "vin": _coerce_vin(payload.vin),
        "plate": _optional_upper(payload.plate),
        "year": _coerce_year(payload.year),
        "make": _optional_text(payload.make),
        "model": _optional_text(payload.model),
        "status": AssetStatus.ACTIVE.value,
        "meter_unit": (
            MeterUnit.HOURS.value
            if payload.meter_unit == MeterUnit.HOURS.value
            else MeterUnit.MILES.value
        ),
        "current_meter": None,
    }
    if not data["code"] or not data["name"]:
        raise AssetValidationError(REQUIRED_FIELDS_MESSAGE)
    return data


def normalize_patch(payload: AssetPatch) -> dict[str, Any]:
    """
    Build the column changes for a partial update.

    Only fields present in the request appear in the result. Text fields are
    normalized as on create; status and meterUnit are validated but never
    defaulted.

    Raises:
        AssetValidationError: On empty code/name, a bad VIN length, non-numeric year,
            or an unknown status / meter unit
    """
    sent = payload.model_fields_set
    changes: dict[str, Any] = {}

    for field in ("code", "name"):
        if field in sent:
            value = _text(getattr(payload, field))
            if not value:
                raise AssetValidationError(REQUIRED_FIELDS_MESSAGE)
            changes[field] = value

    if "asset_type" in sent:
        changes["asset_type"] = _text(payload.asset_type) or DEFAULT_ASSET_TYPE
    if "vin" in sent:
        changes["vin"] = _coerce_vin(payload.vin)
    if "plate" in sent:
        changes["plate"] = _optional_upper(payload.plate)
    if "year" in sent:
        changes["year"] = _coerce_year(payload.year)
    if "make" in sent:
        changes["make"] = _optional_text(payload.make)
    if "model" in sent:
        changes["model"] = _optional_text(payload.model)

    if "status" in sent and payload.status is not None:
        if payload.status not in _STATUSES:
            raise AssetValidationError(
                f"Invalid status: {payload.status}. Must be one of {', '.join(sorted(_STATUSES))}"
            )
        changes["status"] = payload.status

    if "meter_unit" in sent and payload.meter_unit is not None:
        if payload.meter_unit not in _METER_UNITS:
            raise AssetValidationError(
                f"Invalid meter unit: {payload.meter_unit}. Must be MILES or HOURS"
            )
        changes["meter_unit"] = payload.meter_unit

    if "current_meter" in sent:
        changes["current_meter"] = payload.current_meter

    return changes


# ---------- Store operations ----------

async def get_asset_by_id(db: AsyncSession, asset_id: str) -> Asset:
    """Get an asset by ID. Raises AssetNotFoundError if not found."""
    stmt = queries.select_asset_by_id(asset_id)
    result = await db.execute(stmt)
    asset = result.scalar_one_or_none()
    if asset is None:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return asset


async def list_assets(db: AsyncSession) -> list[Asset]:
    """Return all assets ordered by created_at desc."""
    stmt = queries.select_all_assets()
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_asset(db: AsyncSession, payload: AssetCreate) -> Asset:
    """
    Create a new asset from a request payload.

    Raises:
        AssetValidationError: If the payload is invalid (nothing is written)
        AssetStoreError: If the insert fails
    """
    data = normalize_create(payload)
    asset = Asset(**data)
    db.add(asset)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Asset create failed: %s", exc)
        raise AssetStoreError(str(exc)) from exc
    await db.refresh(asset)
    logger.info("Created asset %s (code=%s)", asset.id, asset.code)
    return asset


async def update_asset(db: AsyncSession, asset_id: str, payload: AssetPatch) -> Asset:
    """
    Apply a partial update. Fields absent from the payload are left as they are.

    Raises:
        AssetValidationError: If a supplied field is invalid
        AssetNotFoundError: If asset doesn't exist
        AssetStoreError: If the update fails
    """
    changes = normalize_patch(payload)
    asset = await get_asset_by_id(db, asset_id)

    for column, value in changes.items():
        setattr(asset, column, value)

    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Asset update failed for %s: %s", asset_id, exc)
        raise AssetStoreError(str(exc)) from exc
    await db.refresh(asset)
    logger.info("Updated asset %s fields=%s", asset_id, sorted(changes))
    return asset


async def delete_asset(db: AsyncSession, asset_id: str) -> None:
    """
    Delete an asset by ID.

    Raises:
        AssetNotFoundError: If asset doesn't exist
        AssetStoreError: If the delete fails
    """
    asset = await get_asset_by_id(db, asset_id)
    await db.delete(asset)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Asset delete failed for %s: %s", asset_id, exc)
        raise AssetStoreError(str(exc)) from exc
    logger.info("Deleted asset %s", asset_id)
