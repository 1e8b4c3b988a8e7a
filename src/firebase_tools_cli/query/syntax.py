"""Clause syntax: ``field,operator,value`` / ``field,direction`` / limit."""

from __future__ import annotations

from typing import Any

from ..exceptions import (
    InvalidDirectionError,
    InvalidLimitError,
    MalformedClauseError,
    UnknownOperatorError,
)
from .descriptor import OrderSpec, QueryDescriptor, WhereClause
from .operators import QueryOperator, SortDirection
from .values import coerce_value

# Map accepted spellings to QueryOperator values
_OP_ALIASES: dict[str, QueryOperator] = {
    **{op.value: op for op in QueryOperator},
    "=": QueryOperator.EQ,
    "array_contains": QueryOperator.ARRAY_CONTAINS,
    "array_contains_any": QueryOperator.ARRAY_CONTAINS_ANY,
    "not_in": QueryOperator.NOT_IN,
}

_VALID_OPERATORS: list[str] = [op.value for op in QueryOperator]


def parse_operator(token: str, clause: str | None = None) -> QueryOperator:
    """Resolve an operator token, with suggestions when it is unknown."""
    op = _OP_ALIASES.get(token.lower())
    if op is None:
        raise UnknownOperatorError(token, _VALID_OPERATORS, clause=clause)
    return op


def parse_where(raw: str) -> WhereClause:
    """
    Parse ``field,operator,value`` into a :class:`WhereClause`.

    Commas cannot be escaped, so values containing commas are rejected
    rather than silently truncated.
    """
    segments = raw.split(",")
    if len(segments) < 3:
        raise MalformedClauseError(
            f'Where clause must be in format "field,operator,value", got: {raw!r}',
            clause=raw,
        )
    if len(segments) > 3:
        raise MalformedClauseError(
            f"Where clause has {len(segments)} comma-separated segments; "
            f"values cannot contain commas: {raw!r}",
            clause=raw,
        )
    field, op_token, value = (s.strip() for s in segments)
    if not field:
        raise MalformedClauseError("Where clause field is empty", clause=raw)
    if not op_token:
        raise MalformedClauseError("Where clause operator is empty", clause=raw)
    return WhereClause(
        field_path=field,
        operator=parse_operator(op_token, clause=raw),
        raw_value=value,
        value=coerce_value(value),
    )


def parse_order(raw: str) -> OrderSpec:
    """Parse ``field[,direction]`` into an :class:`OrderSpec`."""
    segments = raw.split(",")
    if len(segments) > 2:
        raise MalformedClauseError(
            f'Order by must be in format "field,direction", got: {raw!r}',
            clause=raw,
        )
    field = segments[0].strip()
    if not field:
        raise MalformedClauseError(
            'Order by field is required (e.g., "name,asc")', clause=raw
        )
    token = segments[1].strip().lower() if len(segments) == 2 else ""
    if not token:
        return OrderSpec(field_path=field)
    try:
        direction = SortDirection(token)
    except ValueError as e:
        raise InvalidDirectionError(
            f'Order direction must be "asc" or "desc", got: {segments[1].strip()!r}',
            clause=raw,
        ) from e
    return OrderSpec(field_path=field, direction=direction)


def parse_limit(raw: Any) -> int:
    """Parse a limit; it must be a positive integer."""
    if isinstance(raw, bool):
        raise InvalidLimitError(f"Limit must be a positive number, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidLimitError(
                f"Limit must be a positive number, got {raw!r}", clause=str(raw)
            )
        value = int(text)
    if value <= 0:
        raise InvalidLimitError(
            f"Limit must be a positive number, got {raw!r}", clause=str(raw)
        )
    return value


def parse_query(
    where: str | None = None,
    order_by: str | None = None,
    limit: Any = None,
) -> QueryDescriptor:
    """Build a :class:`QueryDescriptor` from raw command-line options."""
    return QueryDescriptor(
        where=parse_where(where) if where else None,
        order=parse_order(order_by) if order_by else None,
        limit=parse_limit(limit) if limit is not None else None,
    )
