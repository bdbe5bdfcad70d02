"""Async and sync SQLAlchemy engine and session factories."""

import re
import ssl
from collections.abc import AsyncGenerator

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session, sessionmaker

from bhrf.config import get_settings

settings = get_settings()


def _strip_sslmode(url: str) -> str:
    if "sslmode=" in url:
        url = re.sub(r"[?&]sslmode=[^&]*", "", url)
        # Fix dangling ? or &
        url = url.rstrip("?&")
    return url


def async_database_url(url: str) -> str:
    """Pick the async driver: asyncpg for Postgres, aiosqlite for SQLite."""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("sqlite://"):
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    # asyncpg uses 'ssl' param instead
    return _strip_sslmode(url)


def sync_database_url(url: str) -> str:
    """Pick the sync driver: psycopg2 for Postgres, pysqlite for SQLite."""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg2://", 1)
    elif url.startswith("sqlite+aiosqlite://"):
        url = url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    return _strip_sslmode(url)


_db_url = async_database_url(settings.database_url)
_is_postgres = _db_url.startswith("postgresql")

# Build SSL context for remote Postgres (Neon, Render, AWS RDS, etc.)
_connect_args: dict = {}
_needs_ssl = "sslmode=" in settings.database_url or "neon.tech" in settings.database_url
if _needs_ssl:
    _ssl_ctx = ssl.create_default_context()
    try:
        import certifi
        _ssl_ctx.load_verify_locations(certifi.where())
    except ImportError:
        if settings.is_development:
            _ssl_ctx.check_hostname = False
            _ssl_ctx.verify_mode = ssl.CERT_NONE
    _connect_args["ssl"] = _ssl_ctx

# SQLite pools do not take sizing arguments
_pool_args = {"pool_size": 10, "max_overflow": 20} if _is_postgres else {}

engine = create_async_engine(
    _db_url,
    echo=settings.is_development,
    pool_pre_ping=True,
    connect_args=_connect_args,
    **_pool_args,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yield an async DB session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ---------------------------------------------------------------------------
# Synchronous engine + session (for Celery tasks)
# ---------------------------------------------------------------------------

_sync_db_url = sync_database_url(settings.database_url)

_sync_connect_args: dict = {}
if _needs_ssl:
    try:
        import certifi
        _sync_connect_args["sslmode"] = "verify-full"
        _sync_connect_args["sslrootcert"] = certifi.where()
    except ImportError:
        _sync_connect_args["sslmode"] = "require"

_sync_pool_args = {"pool_size": 5, "max_overflow": 10} if _is_postgres else {}

sync_engine = create_engine(
    _sync_db_url,
    echo=False,
    pool_pre_ping=True,
    connect_args=_sync_connect_args,
    **_sync_pool_args,
)

sync_session_factory = sessionmaker(
    sync_engine,
    class_=Session,
    expire_on_commit=False,
)
