"""Fold query rows into the exported JSON document."""

import json
import math
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from sqlitejson.exceptions import InvalidRequestError, SerializationError

JSON_SCALARS = (str, int, float, bool, type(None))


def js_string(value: Any) -> str:
    """Render a key value the way JavaScript's ``String()`` would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _js_number(value)
    return str(value)


def _js_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    # repr gives the shortest round-tripping digits, as JavaScript does;
    # only the placement of the decimal point differs.
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0") or "0"
    point = len(digit_tuple) + exponent
    prefix = "-" if sign else ""

    if 0 < point <= 21:
        if point >= len(digits):
            return prefix + digits + "0" * (point - len(digits))
        return prefix + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return prefix + "0." + "0" * -point + digits

    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    power = point - 1
    return f"{prefix}{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def fold_rows(
    rows: Iterable[Mapping[str, Any]],
    key: str | None = None,
    projection: tuple[str, ...] | None = None,
) -> list[dict[str, Any]] | dict[str, dict[str, Any]]:
    """
    Fold rows into a list, or into a dict keyed by ``key``.

    Rows are consumed once, in order. In keyed mode a repeated key value
    replaces the earlier row but keeps the position it was first seen at.
    Keys are emitted in that insertion order, even when they look like
    integers.

    Args:
        rows: Row mappings in query order
        key: Field whose stringified value keys the output
        projection: Fields to keep from each row, in this order

    Returns:
        List of row dicts, or dict of key value to row dict

    Raises:
        InvalidRequestError: If a row has no ``key`` field
        SerializationError: If a row holds a value JSON cannot represent
    """
    if key is None:
        return [_prepare_row(row, projection) for row in rows]

    keyed: dict[str, dict[str, Any]] = {}
    for row in rows:
        if key not in row:
            raise InvalidRequestError(
                f"Key column {key!r} is not present in the result rows",
                key=key,
                columns=list(row.keys()),
            )
        keyed[js_string(row[key])] = _prepare_row(row, projection)
    return keyed


def _prepare_row(
    row: Mapping[str, Any], projection: tuple[str, ...] | None
) -> dict[str, Any]:
    if projection is None:
        prepared = dict(row)
    else:
        prepared = {column: row[column] for column in projection if column in row}

    for column, value in prepared.items():
        if not isinstance(value, JSON_SCALARS):
            raise SerializationError(
                f"Column {column!r} holds a {type(value).__name__} value that "
                "cannot be represented as JSON",
                column=column,
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise SerializationError(
                f"Column {column!r} holds a non-finite number ({value})",
                column=column,
            )
    return prepared


def assemble(
    rows: Iterable[Mapping[str, Any]],
    key: str | None = None,
    projection: tuple[str, ...] | None = None,
    indent: int | None = None,
) -> str:
    """
    Assemble rows into the exported JSON string.

    Output is compact unless ``indent`` is given, and non-ASCII text is kept
    as-is.

    Args:
        rows: Row mappings in query order
        key: Field whose stringified value keys the output
        projection: Fields to keep from each row
        indent: JSON indentation level

    Returns:
        JSON array of rows, or JSON object keyed by ``key``

    Raises:
        InvalidRequestError: If a row has no ``key`` field
        SerializationError: If the rows cannot be serialized
    """
    document = fold_rows(rows, key=key, projection=projection)

    try:
        return json.dumps(
            document,
            indent=indent,
            separators=None if indent is not None else (",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize rows: {e}") from e
