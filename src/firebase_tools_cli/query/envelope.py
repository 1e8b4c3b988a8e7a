"""Result envelope: the stable, serialisable shape of every query answer."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .descriptor import QueryDescriptor


class QueryEcho(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    where: str | None = None
    order_by: str | None = Field(default=None, alias="orderBy")
    limit: int | None = None


class ResultSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_results: int = Field(..., ge=0, alias="totalResults")
    is_primitive: bool = Field(default=False, alias="isPrimitive")


class ResultEnvelope(BaseModel):
    """Immutable wrapper around processed query results.

    Serialised with camelCase keys so files written by older releases and
    by this one share a format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    database: str
    path: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    query: QueryEcho = Field(default_factory=QueryEcho)
    summary: ResultSummary
    results: Any = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


def assemble(
    source: str,
    path: str,
    descriptor: QueryDescriptor,
    processed: Any,
    *,
    single: bool = False,
    now: datetime | None = None,
) -> ResultEnvelope:
    """
    Wrap *processed* results in a :class:`ResultEnvelope`.

    Args:
        source: Database identifier (database URL or project id).
        path: The queried path.
        descriptor: The query as the user gave it, echoed back verbatim.
        processed: Output of the post-processor.
        single: *processed* is one document rather than a record set.
        now: Fixed timestamp, mainly for tests.
    """
    echo = descriptor.echo()
    return ResultEnvelope(
        database=source,
        path=path,
        timestamp=now or datetime.now(timezone.utc),
        query=QueryEcho(
            where=echo["where"], order_by=echo["orderBy"], limit=echo["limit"]
        ),
        summary=ResultSummary(
            total_results=count_results(processed, single=single),
            is_primitive=is_primitive(processed, single=single),
        ),
        results=to_jsonable(processed),
    )


def is_primitive(processed: Any, *, single: bool = False) -> bool:
    if single or processed is None:
        return False
    return not isinstance(processed, Mapping | list | tuple)


def count_results(processed: Any, *, single: bool = False) -> int:
    if processed is None:
        return 0
    if single:
        return 1
    if isinstance(processed, Mapping | list | tuple):
        return len(processed)
    return 1


def to_jsonable(value: Any) -> Any:
    """Recursively convert SDK values into JSON-safe Python values."""
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple | set | frozenset):
        return [to_jsonable(v) for v in value]
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, bytes | bytearray):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, Decimal):
        return float(value)
    # GeoPoint
    if hasattr(value, "latitude") and hasattr(value, "longitude"):
        return {"latitude": value.latitude, "longitude": value.longitude}
    # DocumentReference
    if hasattr(value, "path") and hasattr(value, "id"):
        return str(value.path)
    return str(value)
