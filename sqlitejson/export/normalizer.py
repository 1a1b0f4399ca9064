"""Resolve export requests into a single executable statement."""

import hashlib
import re
from typing import Any

from sqlitejson.exceptions import InvalidRequestError
from sqlitejson.export.models import CanonicalQuery, RequestInput, coerce_request
from sqlitejson.logging_config import get_logger

logger = get_logger(__name__)

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)?$")


def normalize(request: RequestInput, **options: Any) -> CanonicalQuery:
    """
    Build the canonical query for an export request.

    Precedence:
    1. A raw SQL string passed as the request is the statement.
    2. A non-empty ``sql`` field is the statement; ``where`` is ignored.
    3. Otherwise ``SELECT <columns or *> FROM <table> [WHERE <where>]``.

    ``key`` never appears in the SQL. When ``columns`` leaves it out, the key
    is appended to the projection so every row can still be keyed.

    Args:
        request: Raw SQL string, mapping of request fields, or ExportRequest
        **options: Request fields overlaid on top of ``request``

    Returns:
        CanonicalQuery with statement, key and any post-query projection

    Raises:
        InvalidRequestError: If no statement can be built or the table name
            is not a valid identifier
    """
    export_request = coerce_request(request, **options)
    key = export_request.key or None
    columns = _with_key(export_request.columns, key)

    sql = (export_request.sql or "").strip()
    if sql:
        query = CanonicalQuery(statement=sql, key=key, projection=columns)
    else:
        table = (export_request.table or "").strip()
        if not table:
            raise InvalidRequestError("Export request needs either 'table' or 'sql'")
        if not IDENTIFIER_PATTERN.match(table):
            raise InvalidRequestError(f"Invalid table name: {table!r}", table=table)

        select_list = ", ".join(columns) if columns else "*"
        statement = f"SELECT {select_list} FROM {table}"

        where = (export_request.where or "").strip()
        if where:
            statement = f"{statement} WHERE {where}"

        query = CanonicalQuery(statement=statement, key=key)

    logger.debug(
        "Normalized export request",
        query_hash=hash_query(query.statement),
        statement=sanitize_for_logging(query.statement),
        key=query.key,
        projection=query.projection,
    )
    return query


def _with_key(columns: list[str] | None, key: str | None) -> tuple[str, ...] | None:
    if not columns:
        return None
    if key and key not in columns:
        return (*columns, key)
    return tuple(columns)


def hash_query(sql: str) -> str:
    """
    Generate hash of SQL statement.

    Args:
        sql: SQL statement

    Returns:
        Short SHA-256 hash of the whitespace-normalized statement
    """
    normalized = " ".join(sql.lower().split())
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def sanitize_for_logging(sql: str, max_length: int = 200) -> str:
    """
    Sanitize SQL statement for safe logging.

    String literals and long numbers are masked so row values do not end up
    in the logs.

    Args:
        sql: SQL statement
        max_length: Maximum length for logged statement

    Returns:
        Sanitized statement
    """
    if len(sql) > max_length:
        sql = sql[:max_length] + "..."

    sql = re.sub(r"'[^']*'", "'<string>'", sql)
    sql = re.sub(r"\b\d{10,}\b", "<number>", sql)

    return sql
