"""
Database configuration and session management

Tables are declared under two placeholder schemas, one for the GCD source
tables and one for the m_* migration tables. Every engine built here maps
them onto SOURCE_SCHEMA / TARGET_SCHEMA (None = connection default).
"""
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from credit_updater.core.config import settings

SOURCE_SCHEMA_KEY = "gcd_source"
TARGET_SCHEMA_KEY = "gcd_target"

# Database unreachable or connection dropped. These end a run instead of failing one row.
CONNECTION_ERRORS = (OperationalError, InterfaceError, DisconnectionError, OSError)


def create_engine_for(
    url: str,
    source_schema: Optional[str] = None,
    target_schema: Optional[str] = None,
    echo: bool = False,
    **pool_config: Any,
) -> AsyncEngine:
    """
    Build an async engine with the source/target schema translation applied.

    Used for the application engine below and by tests that need a
    throwaway database.
    """
    engine = create_async_engine(url, echo=echo, future=True, **pool_config)
    return engine.execution_options(
        schema_translate_map={
            SOURCE_SCHEMA_KEY: source_schema,
            TARGET_SCHEMA_KEY: target_schema,
        }
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# Production: pooled with configured limits; development: small pool
pool_config: Dict[str, Any] = {}

if settings.ENVIRONMENT == "production":
    pool_config = {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }
elif settings.DATABASE_URL.startswith("sqlite"):
    # Local/test databases; aiosqlite picks its own pool
    pool_config = {}
else:
    pool_config = {
        "pool_size": 2,
        "max_overflow": 5,
        "pool_pre_ping": True,
    }

engine = create_engine_for(
    settings.DATABASE_URL,
    source_schema=settings.SOURCE_SCHEMA,
    target_schema=settings.TARGET_SCHEMA,
    echo=settings.DEBUG,
    **pool_config,
)

AsyncSessionLocal = create_session_factory(engine)

Base = declarative_base()


@asynccontextmanager
async def get_db_session(session_factory: Optional[async_sessionmaker] = None):
    """
    Session that commits on success and rolls back on error.

    Extractors open one per row. Usage:
        async with get_db_session() as db:
            result = await db.execute(...)
    """
    factory = session_factory or AsyncSessionLocal
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
