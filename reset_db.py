# reset_db.py
"""
Database reset utility - drops all tables and recreates them fresh.

Usage:
    python reset_db.py           # Reset only
    python reset_db.py --seed    # Reset + seed sample fleet
"""
import argparse
import asyncio
import sys

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from db import engine
from db_base import Base

# Import all models to register them with Base.metadata
import db_models  # noqa: F401


def _describe_tables(sync_conn) -> dict[str, list[tuple[str, str]]]:
    inspector = inspect(sync_conn)
    return {
        table: [(c["name"], str(c["type"])) for c in inspector.get_columns(table)]
        for table in sorted(inspector.get_table_names())
    }


async def reset_database() -> bool:
    """Drop all tables and recreate them."""
    print("=" * 60)
    print("DATABASE RESET UTILITY")
    print("=" * 60)
    print(f"\nConnecting to: {engine.url.render_as_string(hide_password=True)}")

    try:
        async with engine.begin() as conn:
            print("\nDropping all tables...")
            await conn.run_sync(Base.metadata.drop_all)

            print("\n" + "-" * 60)
            print("Creating fresh tables from SQLAlchemy models...")
            print("-" * 60)
            await conn.run_sync(Base.metadata.create_all)

            tables = await conn.run_sync(_describe_tables)

        print(f"\nCreated {len(tables)} tables:")
        for table, columns in tables.items():
            print(f"\n  {table}:")
            for col_name, col_type in columns:
                print(f"    - {col_name}: {col_type}")

        print("\n" + "=" * 60)
        print("DATABASE RESET COMPLETE!")
        print("=" * 60)
        return True

    except SQLAlchemyError as e:
        print(f"\nERROR: {e}")
        return False


async def main(seed: bool) -> bool:
    try:
        ok = await reset_database()
        if ok and seed:
            print("\n" + "=" * 60)
            print("SEEDING DATABASE WITH SAMPLE FLEET...")
            print("=" * 60 + "\n")
            from seed_database import seed_assets
            await seed_assets()
        return ok
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Reset database - drop all tables and recreate fresh"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Seed the sample fleet after reset",
    )
    args = parser.parse_args()

    success = asyncio.run(main(args.seed))
    sys.exit(0 if success else 1)
