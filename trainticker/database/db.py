from typing import AsyncIterator, Optional

import asyncpg

from trainticker import config

_pool: Optional[asyncpg.Pool] = None


def get_database_url() -> str:
    url = config.DATABASE_URL
    if url.startswith("postgresql+asyncpg://"):
        return url.replace("postgresql+asyncpg://", "postgresql://", 1)
    return url


async def get_pool() -> asyncpg.Pool:
    global _pool
    if _pool is None:
        url = get_database_url()
        if not url:
            raise RuntimeError("DATABASE_URL is not set")
        _pool = await asyncpg.create_pool(
            url,
            min_size=config.DB_POOL_MIN_SIZE,
            max_size=config.DB_POOL_MAX_SIZE,
            command_timeout=config.DB_COMMAND_TIMEOUT,
        )
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


async def get_db() -> AsyncIterator[asyncpg.Connection]:
    """FastAPI dependency: one pooled connection per request."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn
