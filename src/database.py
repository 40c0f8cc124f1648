"""
Database configuration and session management.

Provides:
- Async engine creation with proper configuration
- AsyncSessionLocal factory for creating database sessions
- Database initialization utilities
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

if settings.is_production:
    settings.validate_production_config()


def get_async_database_url(sync_url: str) -> str:
    """Convert sync database URL to async URL."""
    if sync_url.lower().startswith("sqlite:///"):
        # SQLite async uses aiosqlite
        return sync_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    elif sync_url.lower().startswith("postgresql://"):
        # PostgreSQL async uses asyncpg
        return sync_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return sync_url


def create_engine_for_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine configured for the database type.

    Args:
        database_url: Sync-style database URL (converted to its async driver)
        echo: Log SQL statements

    Returns:
        Async SQLAlchemy engine
    """
    async_url = get_async_database_url(database_url)
    if "sqlite" in database_url.lower():
        return create_async_engine(async_url, echo=echo)
    return create_async_engine(
        async_url,
        pool_size=5,  # Maximum number of connections in pool
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True,  # Test connections before using them
        echo=echo,
    )


async_engine = create_engine_for_url(
    settings.database_url,
    echo=settings.log_level == "DEBUG",
)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)


async def init_db(engine: AsyncEngine = async_engine) -> None:
    """
    Initialize database by creating all tables.

    Useful for development and testing. In production, use Alembic migrations.
    """
    from src.models.base import Base
    import src.models  # noqa: F401

    logger.info("Creating database tables...")
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")


async def check_connection(engine: AsyncEngine = async_engine) -> bool:
    """
    Test database connection.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
