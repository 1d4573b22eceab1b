# api/assets/models.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _AssetPayload(BaseModel):
    """
    Request bodies use camelCase keys (assetType, meterUnit, ...).

    Text fields are taken loosely: numbers are accepted and stringified so a
    unit code like 85 arrives as "85". Normalization happens in db_manager.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    code: str | None = None
    name: str | None = None
    asset_type: str | None = None
    vin: str | None = None
    plate: str | None = None
    # String on the way in; "" means "no year", anything else must be numeric
    year: str | None = None
    make: str | None = None
    model: str | None = None
    meter_unit: str | None = None


class AssetCreate(_AssetPayload):
    """
    POST body. status and currentMeter are not accepted here: a new asset is
    always ACTIVE with no meter reading.
    """
    pass


class AssetPatch(_AssetPayload):
    """
    PATCH body. Every field is optional; only keys present in the request
    (`model_fields_set`) are applied. status and meterUnit are ignored when
    null, currentMeter may be null to clear the reading.
    """
    status: str | None = None
    current_meter: float | None = Field(None, allow_inf_nan=False)


class AssetRead(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    code: str
    name: str
    asset_type: str
    vin: str | None = None
    plate: str | None = None
    year: int | None = None
    make: str | None = None
    model: str | None = None
    status: str
    meter_unit: str
    current_meter: float | None = None
    created_at: datetime


class DeleteResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str
