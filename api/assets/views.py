# api/assets/views.py
"""
Asset CRUD endpoints.

Every failure is answered with 400 and an `{"error": ...}` body.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from .models import AssetCreate, AssetPatch, AssetRead, DeleteResponse, ErrorResponse
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])

_ERROR_RESPONSES = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


@router.get(
    "",
    response_model=list[AssetRead],
    summary="List assets",
)
async def list_assets_endpoint(
    db: AsyncSession = Depends(get_session),
) -> list[AssetRead]:
    """
    List all assets, newest first.
    """
    assets = await db_manager.list_assets(db)
    return [AssetRead.model_validate(a) for a in assets]


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
    summary="Create an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    db: AsyncSession = Depends(get_session),
) -> AssetRead | JSONResponse:
    """
    Create an asset. New assets are ACTIVE, metered in MILES unless HOURS is
    requested, and have no meter reading.
    """
    try:
        asset = await db_manager.create_asset(db, payload)
    except (db_manager.AssetValidationError, db_manager.AssetStoreError) as exc:
        return _error(exc)

    return AssetRead.model_validate(asset)


@router.patch(
    "/{asset_id}",
    response_model=AssetRead,
    responses=_ERROR_RESPONSES,
    summary="Partially update an asset",
)
async def update_asset_endpoint(
    asset_id: str,
    payload: AssetPatch,
    db: AsyncSession = Depends(get_session),
) -> AssetRead | JSONResponse:
    """
    Update only the fields present in the body; everything else is kept.
    """
    try:
        asset = await db_manager.update_asset(db, asset_id, payload)
    except (
        db_manager.AssetValidationError,
        db_manager.AssetNotFoundError,
        db_manager.AssetStoreError,
    ) as exc:
        return _error(exc)

    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    response_model=DeleteResponse,
    responses=_ERROR_RESPONSES,
    summary="Delete an asset",
)
async def delete_asset_endpoint(
    asset_id: str,
    db: AsyncSession = Depends(get_session),
) -> DeleteResponse | JSONResponse:
    try:
        await db_manager.delete_asset(db, asset_id)
    except (db_manager.AssetNotFoundError, db_manager.AssetStoreError) as exc:
        return _error(exc)

    return DeleteResponse(ok=True)
