from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def normalize_database_url(database_url: str) -> str:
    # Convert regular Postgres URL to async format
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


def build_engine(database_url: str, connect_timeout: float = 5.0) -> AsyncEngine:
    url = normalize_database_url(database_url)
    connect_args = {}
    if url.startswith("postgresql+asyncpg://"):
        connect_args["timeout"] = connect_timeout
    return create_async_engine(url, connect_args=connect_args, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
