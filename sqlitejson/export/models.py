"""Export request models and the canonical query they resolve to."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sqlitejson.exceptions import InvalidRequestError


class ExportRequest(BaseModel):
    """Caller intent for a single export.

    Either ``sql`` or ``table`` must end up set. An explicit ``sql`` always
    wins over ``table``/``where`` when the statement is built.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    table: str | None = Field(default=None, description="Table to export")
    sql: str | None = Field(default=None, description="Raw SQL, overrides table/where")
    where: str | None = Field(default=None, description="Raw SQL boolean expression")
    columns: list[str] | None = Field(default=None, description="Projection list")
    key: str | None = Field(default=None, description="Field whose value keys the output")

    @field_validator("columns", mode="before")
    @classmethod
    def split_columns(cls, v: Any) -> Any:
        """Accept a comma-separated string and drop blank names."""
        if v is None:
            return None
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            cleaned = [c.strip() if isinstance(c, str) else c for c in v]
            return [c for c in cleaned if c != ""]
        return v


RequestInput = Union[str, Mapping[str, Any], ExportRequest]


def coerce_request(request: RequestInput, **options: Any) -> ExportRequest:
    """
    Resolve the accepted request shapes into one ExportRequest.

    Args:
        request: Raw SQL string, mapping of request fields, or ExportRequest
        **options: Request fields overlaid on top of ``request``

    Returns:
        Validated ExportRequest

    Raises:
        InvalidRequestError: If the request has unknown fields or bad types
    """
    options = {k: v for k, v in options.items() if v is not None}

    if isinstance(request, ExportRequest):
        fields = request.model_dump(exclude_none=True)
    elif isinstance(request, str):
        fields = {}
        options["sql"] = request
    elif isinstance(request, Mapping):
        fields = dict(request)
    else:
        raise InvalidRequestError(
            f"Unsupported request type: {type(request).__name__}",
            request_type=type(request).__name__,
        )

    fields.update(options)

    try:
        return ExportRequest(**fields)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidRequestError(f"Invalid export request: {details}") from e


@dataclass(frozen=True)
class CanonicalQuery:
    """
    Statement ready to execute plus the post-processing it needs.

    Attributes:
        statement: Final SQL text
        key: Field used to key the output, never part of the SQL
        projection: Columns to keep after the query runs. Only set when the
            projection could not be pushed into the statement.
    """

    statement: str
    key: str | None = None
    projection: tuple[str, ...] | None = None
