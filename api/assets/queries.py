# api/assets/queries.py
"""
SQLAlchemy query builders for asset operations.
"""
from sqlalchemy import select

from db_models.asset import Asset


def select_asset_by_id(asset_id: str):
    """Select an asset by its ID."""
    return select(Asset).where(Asset.id == asset_id)


def select_all_assets():
    """Select all assets ordered by creation time (newest first)."""
    return select(Asset).order_by(Asset.created_at.desc())
