"""Exporter bound to one SQLite database."""

import time
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine

from sqlitejson.config import Settings, get_settings
from sqlitejson.db.engine import (
    create_engine,
    dispose_engine,
    fetch_rows,
    list_tables,
    list_views,
)
from sqlitejson.export.assembler import assemble
from sqlitejson.export.models import RequestInput
from sqlitejson.export.normalizer import hash_query, normalize
from sqlitejson.export.writer import export_to_file
from sqlitejson.logging_config import get_logger, log_operation

logger = get_logger(__name__)

DatabaseSource = AsyncEngine | str | Path


class Exporter:
    """
    Export SQLite rows as JSON.

    The exporter is bound either to an existing ``AsyncEngine`` or to a
    database path/URL. A path is only opened on first use, and only engines
    the exporter opened itself are disposed by ``close()``.

    Every operation runs exactly one statement and either returns its result
    or raises; nothing is retried.

    Usage:
        async with open_exporter("presidents.db") as exporter:
            tables = await exporter.tables()
            data = await exporter.json({"table": "presidents", "key": "name"})
            await exporter.save("SELECT name FROM presidents", "out.json")
    """

    def __init__(self, source: DatabaseSource, settings: Settings | None = None) -> None:
        """
        Initialize exporter.

        Args:
            source: Existing async engine, database file path, or SQLite URL
            settings: Settings to use (global settings if not provided)
        """
        self.settings = settings or get_settings()

        if isinstance(source, AsyncEngine):
            self._engine: AsyncEngine | None = source
            self._location: str | Path | None = None
            self._owns_engine = False
        elif isinstance(source, (str, Path)):
            self._engine = None
            self._location = source
            self._owns_engine = True
        else:
            raise TypeError(
                f"Exporter source must be an AsyncEngine, path or URL, "
                f"not {type(source).__name__}"
            )

    @property
    def engine(self) -> AsyncEngine:
        """Engine for this exporter, created on first access for path sources."""
        if self._engine is None:
            self._engine = create_engine(
                self._location, timeout=self.settings.database_timeout
            )
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def tables(self) -> list[str]:
        """
        List user tables in the database.

        Raises:
            DatabaseError: If the catalog cannot be read
        """
        return await list_tables(self.engine)

    async def views(self) -> list[str]:
        """List views in the database."""
        return await list_views(self.engine)

    async def json(self, request: RequestInput, **options: Any) -> str:
        """
        Export the rows selected by ``request`` as a JSON string.

        Args:
            request: Raw SQL string, mapping of request fields, or ExportRequest
            **options: Request fields (table, sql, where, columns, key)
                overlaid on top of ``request``

        Returns:
            JSON array of rows, or JSON object keyed by ``key``

        Raises:
            InvalidRequestError: If the request is malformed
            DatabaseError: If the query fails
            SerializationError: If the rows cannot be serialized
        """
        start_time = time.time()
        query = normalize(request, **options)

        rows = await fetch_rows(self.engine, query.statement)
        document = assemble(
            rows,
            key=query.key,
            projection=query.projection,
            indent=self.settings.json_indent,
        )

        log_operation(
            logger,
            "export",
            query_hash=hash_query(query.statement),
            row_count=len(rows),
            keyed=query.key is not None,
            execution_time=time.time() - start_time,
        )
        return document

    async def save(
        self, request: RequestInput, destination: str | Path, **options: Any
    ) -> str:
        """
        Export ``request`` and write the JSON string to ``destination``.

        Args:
            request: Raw SQL string, mapping of request fields, or ExportRequest
            destination: Output file path, overwritten if it exists
            **options: Request fields overlaid on top of ``request``

        Returns:
            The JSON string that was written

        Raises:
            ExportIOError: If the file cannot be written
        """
        document = await self.json(request, **options)
        path = await export_to_file(document, destination)
        log_operation(logger, "save", path=str(path))
        return document

    async def close(self) -> None:
        """Dispose of the engine if this exporter created it."""
        if self._engine is not None and self._owns_engine:
            await dispose_engine(self._engine)
            self._engine = None

    async def __aenter__(self) -> "Exporter":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


def open_exporter(source: DatabaseSource, settings: Settings | None = None) -> Exporter:
    """
    Create an exporter for an existing engine or a database path.

    Args:
        source: Existing async engine, database file path, or SQLite URL
        settings: Settings to use (global settings if not provided)

    Returns:
        Exporter bound to ``source``
    """
    return Exporter(source, settings=settings)
