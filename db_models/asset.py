# db_models/asset.py
"""
Asset model: a tracked vehicle or piece of equipment.

Statuses:
- ACTIVE: in service
- IN_SHOP: down for repair or PM
- OUT_OF_SERVICE: failed inspection or otherwise unusable
- RETIRED: kept for history only
"""
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import String, Integer, Float, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class AssetStatus(str, Enum):
    ACTIVE = "ACTIVE"
    IN_SHOP = "IN_SHOP"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"
    RETIRED = "RETIRED"


class MeterUnit(str, Enum):
    MILES = "MILES"
    HOURS = "HOURS"


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=_new_id,
    )

    # Unique by convention only; duplicates are not rejected
    code: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    asset_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="Truck",
        server_default="Truck",
    )

    vin: Mapped[str | None] = mapped_column(String(17), nullable=True)
    plate: Mapped[str | None] = mapped_column(String(20), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    make: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetStatus.ACTIVE.value,
        server_default=AssetStatus.ACTIVE.value,
    )

    meter_unit: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=MeterUnit.MILES.value,
        server_default=MeterUnit.MILES.value,
    )

    current_meter: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Python-side default keeps microsecond precision on every backend,
    # which the newest-first ordering relies on.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        index=True,
    )
