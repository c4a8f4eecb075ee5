"""
Create the trains and schedules tables if they are missing.
Safe to re-run; follow it with seed_schedules.py for sample data.

  python scripts/init_db.py
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from trainticker.database.db import close_pool, get_pool

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "trainticker" / "database" / "schema.sql"


async def init_db():
    pool = await get_pool()
    try:
        async with pool.acquire() as conn:
            # no arguments, so asyncpg runs the whole multi-statement file at once
            await conn.execute(SCHEMA_PATH.read_text())
    finally:
        await close_pool()
    print(f"Applied {SCHEMA_PATH.name}")


if __name__ == "__main__":
    asyncio.run(init_db())
