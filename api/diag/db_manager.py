# api/diag/db_manager.py
"""
Database diagnostics: server clock and which asset tables exist.
"""
from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession


async def get_database_time(db: AsyncSession) -> str:
    result = await db.execute(select(func.current_timestamp()))
    return str(result.scalar_one())


def _asset_table_names(sync_conn) -> list[str]:
    names = inspect(sync_conn).get_table_names()
    return sorted(n for n in names if n.lower().startswith("asset"))


async def list_asset_tables(db: AsyncSession) -> list[str]:
    """Names of tables starting with 'asset' in the default schema."""
    conn = await db.connection()
    return await conn.run_sync(_asset_table_names)
