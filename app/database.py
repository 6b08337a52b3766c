from pathlib import Path

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from app.config import get_settings
from app.utils.logger import logger

settings = get_settings()

is_sqlite = settings.database_url.startswith("sqlite")

if is_sqlite:
    # aiosqlite connections are bound to the event loop that opened them
    engine = create_async_engine(
        settings.database_url,
        echo=settings.debug,
        future=True,
        poolclass=NullPool,
    )
else:
    engine = create_async_engine(
        settings.database_url,
        echo=settings.debug,
        future=True,
        pool_pre_ping=True,  # Detect and recycle stale/broken connections
        pool_recycle=300,  # Recycle connections every 5 minutes
    )

# Create session factory
AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Base class for models
Base = declarative_base()

# Largest primary key an INTEGER/BIGINT column holds
MAX_ID = 2**63 - 1

# Dependency for FastAPI routes
async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def _ensure_sqlite_dir():
    """Create the parent directory of a file-backed SQLite database"""
    db_path = settings.database_url.split(":///", 1)[-1]
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)


# Initialize database (create tables)
async def init_db():
    """Create all database tables"""
    # Import models to register them with Base
    from app.models import user, job, application  # noqa: F401

    if is_sqlite:
        _ensure_sqlite_dir()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created")


async def drop_db():
    """Drop all tables (used by the test suite to reset state)"""
    from app.models import user, job, application  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
