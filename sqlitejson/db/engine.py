"""Database engine creation and read access."""

from pathlib import Path
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from sqlitejson.exceptions import DatabaseError
from sqlitejson.logging_config import get_logger

logger = get_logger(__name__)


def to_database_url(location: str | Path) -> str:
    """
    Turn a filesystem path or SQLite URL into an aiosqlite URL.

    Args:
        location: Path to a database file, or a ``sqlite://`` URL

    Returns:
        ``sqlite+aiosqlite://`` URL
    """
    location = str(location)

    if location.startswith("sqlite+aiosqlite://"):
        return location
    if location.startswith("sqlite://"):
        return location.replace("sqlite://", "sqlite+aiosqlite://", 1)

    return f"sqlite+aiosqlite:///{location}"


def database_path(url: str) -> Path | None:
    """Return the file path behind a SQLite URL, or None for in-memory databases."""
    path_str = url.split("///", 1)[-1] if "///" in url else ""
    path_str = path_str.split("?", 1)[0]
    if not path_str or path_str == ":memory:":
        return None
    return Path(path_str)


def create_engine(location: str | Path, timeout: float = 5.0) -> AsyncEngine:
    """
    Create async SQLAlchemy engine for a SQLite database.

    Connections are opened per operation; nothing is pooled.

    Args:
        location: Path to a database file, or a ``sqlite://`` URL
        timeout: Seconds SQLite waits on a locked database

    Returns:
        Configured async engine

    Raises:
        DatabaseError: If the database file does not exist
    """
    db_url = to_database_url(location)

    db_path = database_path(db_url)
    if db_path is not None and not db_path.exists():
        raise DatabaseError(f"Database file not found: {db_path}")

    logger.debug("Creating database engine", url=db_url)
    return create_async_engine(
        db_url,
        echo=False,
        poolclass=NullPool,
        connect_args={
            "check_same_thread": False,
            "timeout": timeout,
        },
    )


async def fetch_rows(engine: AsyncEngine, statement: str) -> list[dict[str, Any]]:
    """
    Execute one statement and return its rows in result order.

    The statement goes to the driver untouched, so ``:name`` text inside
    literals is never treated as a bind parameter.

    Args:
        engine: SQLAlchemy async engine
        statement: SQL statement

    Returns:
        One dict per row, keyed by column name

    Raises:
        DatabaseError: If the statement fails
    """
    try:
        async with engine.connect() as conn:
            result = await conn.exec_driver_sql(statement)
            rows = [dict(row) for row in result.mappings()]
    except SQLAlchemyError as e:
        raise DatabaseError(
            f"Query failed: {_driver_message(e)}", statement=statement
        ) from e

    logger.debug("Query returned rows", row_count=len(rows))
    return rows


async def list_tables(engine: AsyncEngine) -> list[str]:
    """
    List user tables, leaving out SQLite's internal catalog tables.

    Args:
        engine: SQLAlchemy async engine

    Returns:
        Table names as reported by the catalog

    Raises:
        DatabaseError: If the catalog cannot be read
    """
    try:
        async with engine.connect() as conn:
            return await conn.run_sync(lambda c: inspect(c).get_table_names())
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to list tables: {_driver_message(e)}") from e


async def list_views(engine: AsyncEngine) -> list[str]:
    """List views defined in the database."""
    try:
        async with engine.connect() as conn:
            return await conn.run_sync(lambda c: inspect(c).get_view_names())
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to list views: {_driver_message(e)}") from e


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    Dispose of engine and close all connections.

    Args:
        engine: SQLAlchemy async engine
    """
    await engine.dispose()
    logger.debug("Database engine disposed")


def _driver_message(error: SQLAlchemyError) -> str:
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)
