from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from pizzeria.core.config import settings
from pizzeria.models.base import Base


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Local dev / tests: one connection per session, no pooling
        return {"poolclass": NullPool}
    # Fixed-size pool: requests beyond capacity wait for a free connection
    return {"pool_size": settings.db_pool_size, "max_overflow": 0, "pool_pre_ping": True}


# Create engine
engine = create_async_engine(
    settings.database_url, echo=settings.db_echo, **_engine_options(settings.database_url)
)

# Async session maker
async_session = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


# Dependency
async def get_db():
    async with async_session() as session:
        yield session


@asynccontextmanager
async def transaction(db: AsyncSession):
    """Commit on success, roll back everything on any error and re-raise."""
    try:
        yield db
        await db.commit()
    except Exception:
        await db.rollback()
        raise


async def create_db_and_tables():
    import pizzeria.models  # registers every model on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db_and_tables():
    import pizzeria.models

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# Reusable engine getter
def get_async_engine():
    return engine
