"""Database Connection and Session Management"""

import re
from typing import AsyncGenerator, Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from app.config import settings

_SSLMODE = re.compile(r"[?&]sslmode=([^&]+)", re.I)


def build_async_url(raw_url: str) -> Tuple[str, Dict[str, str]]:
    """
    Turn a plain postgresql:// URL into an asyncpg URL plus connect_args.

    asyncpg takes the TLS mode as the `ssl` connect argument rather than a
    `sslmode` query parameter, so the parameter moves out of the URL.
    """
    url = raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    connect_args: Dict[str, str] = {}

    match = _SSLMODE.search(url)
    if match:
        connect_args["ssl"] = match.group(1).lower()
        url = _SSLMODE.sub("", url)
        if "?" not in url and "&" in url:
            url = url.replace("&", "?", 1)
    return url, connect_args


database_url, connect_args = build_async_url(settings.DATABASE_URL)

# The dashboard fans out several reads per request, each on its own pooled connection
engine = create_async_engine(
    database_url,
    connect_args=connect_args,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    echo=settings.DEBUG,
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for declarative models
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function to get database session.
    
    Yields:
        AsyncSession: Database session
        
    Example:
        ```python
        @router.get("/admissions")
        async def list_admissions(db: AsyncSession = Depends(get_db)):
            # Use db session here
            pass
        ```
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Initialize database tables (for development only)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections"""
    await engine.dispose()
