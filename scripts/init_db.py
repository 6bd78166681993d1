"""
Standalone script to create the database schema (users, flats,
payment_types, payments) on the configured database.

Usage:
    python scripts/init_db.py [--yes]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# --- Path Setup ---
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT / 'src') not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / 'src'))


async def init_db():
    from flat_payments_backend.common.config import settings
    from flat_payments_backend.database import engine as db_engine

    print(f"Creating schema on {'TEST' if settings.TEST_MODE else 'PRODUCTION'} database...")
    db_engine.create_db_engine_and_session_factory()
    try:
        await db_engine.create_all_tables()
    finally:
        await db_engine.dispose_db_engine()
    print("Schema created successfully.")


def main():
    parser = argparse.ArgumentParser(description="Create the flat payments database schema.")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt for the production database.")
    args = parser.parse_args()

    from flat_payments_backend.common.config import settings

    if not settings.TEST_MODE and not args.yes:
        print("⚠️  WARNING: You are about to create tables on the PRODUCTION database. ⚠️")
        confirmation = input("Are you sure you want to proceed? (y/n): ").strip().lower()
        if confirmation != 'y':
            print("Operation aborted.")
            return

    asyncio.run(init_db())


if __name__ == "__main__":
    main()
