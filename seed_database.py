"""Script to seed the database with a sample fleet"""
import argparse
import asyncio

from sqlalchemy import func, select, delete

from db import AsyncSessionLocal, engine, init_db
from db_models.asset import Asset
from api.assets import db_manager
from api.assets.models import AssetCreate

SAMPLE_FLEET = [
    {"code": "85", "name": "F-550 Truck", "assetType": "Truck", "make": "Ford", "model": "F-550", "year": 2019},
    {"code": "25400", "name": "Case 621G", "assetType": "Loader", "make": "Case", "model": "621G", "meterUnit": "HOURS"},
    {"code": "25250", "name": "Case SV280B", "assetType": "Skid", "make": "Case", "model": "SV280B", "meterUnit": "HOURS"},
    {"code": "PL-22", "name": "Western Wide-Out Plow", "assetType": "Attachment"},
    {"code": "SLT-9", "name": "SaltDogg 2yd", "assetType": "Salter"},
]


async def seed_assets(clear: bool = False) -> int:
    """Insert the sample fleet. Returns how many assets were added."""
    async with AsyncSessionLocal() as session:
        existing = (await session.execute(select(func.count(Asset.id)))).scalar_one()
        if existing and not clear:
            print(f"Database already has {existing} assets, skipping seed (use --clear to re-seed)")
            return 0
        if existing:
            await session.execute(delete(Asset))
            await session.commit()
            print(f"[OK] Cleared {existing} existing assets")

        count = 0
        for row in SAMPLE_FLEET:
            asset = await db_manager.create_asset(session, AssetCreate.model_validate(row))
            count += 1
            print(f"  Added: {asset.code} - {asset.name}")

    print(f"\n[OK] Successfully seeded {count} assets into the database")
    return count


async def main(clear: bool) -> None:
    await init_db()
    try:
        await seed_assets(clear=clear)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the fleet database with sample assets")
    parser.add_argument("--clear", action="store_true", help="Delete existing assets first")
    args = parser.parse_args()

    print("=" * 60)
    print("DATABASE SEEDING SCRIPT")
    print("=" * 60)

    asyncio.run(main(args.clear))
