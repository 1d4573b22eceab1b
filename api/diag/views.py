# api/diag/views.py
"""
Database connectivity check.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from .models import DiagResponse, TableName
from . import db_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diag", tags=["system"])


@router.get(
    "",
    response_model=DiagResponse,
    summary="Check database connectivity",
)
async def diag_endpoint(
    db: AsyncSession = Depends(get_session),
) -> DiagResponse | JSONResponse:
    """
    Report the database clock and the asset tables it holds.
    Answers 500 with `{"ok": false, "error": ...}` when the database is unreachable.
    """
    try:
        now = await db_manager.get_database_time(db)
        tables = await db_manager.list_asset_tables(db)
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Database diagnostics failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False, "error": str(exc)},
        )

    return DiagResponse(
        ok=True,
        now=now,
        tables=[TableName(table_name=t) for t in tables],
    )
