"""
Async SQLAlchemy session factory.

PostgreSQL (asyncpg) in production; SQLite (aiosqlite) URLs are accepted for
local runs, which is why pool sizing is only applied to server databases.
"""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config.settings import config
from database.models import Base


def _engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 10, "max_overflow": 20, "pool_recycle": 3600}


engine = create_async_engine(
    config.database_url,
    echo=False,
    **_engine_options(config.database_url),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create the ``users`` table and its unique indexes if missing."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

