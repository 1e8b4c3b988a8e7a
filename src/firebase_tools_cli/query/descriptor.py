"""
Query descriptor and execution plan value objects.

``QueryDescriptor`` is what the user asked for; ``ExecutionPlan`` is how a
particular backend will answer it: which clauses run natively and which are
applied client-side afterwards.

Both are immutable and built fresh for every invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ..exceptions import InvalidLimitError
from .operators import QueryOperator, SortDirection
from .values import split_path


@dataclass(frozen=True)
class WhereClause:
    """
    A single ``field,operator,value`` filter.

    Attributes:
        field_path: ``/``-separated path to the compared field.
        operator: The comparison operator.
        raw_value: The value exactly as typed.
        value: ``raw_value`` after coercion (bool, None, number or str).
    """

    field_path: str
    operator: QueryOperator
    raw_value: str
    value: Any

    @property
    def segments(self) -> list[str]:
        return split_path(self.field_path)

    def with_operator(self, operator: QueryOperator) -> WhereClause:
        """Return a copy comparing the same field and value with *operator*."""
        return replace(self, operator=operator)

    def to_text(self) -> str:
        return f"{self.field_path},{self.operator.value},{self.raw_value}"


@dataclass(frozen=True)
class OrderSpec:
    """Ordering by a single ``/``-separated field path."""

    field_path: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    def to_text(self) -> str:
        return f"{self.field_path},{self.direction.value}"


@dataclass(frozen=True)
class QueryDescriptor:
    """
    The parsed ``--where`` / ``--order-by`` / ``--limit`` options.

    Raises:
        InvalidLimitError: If ``limit`` is given and is not a positive int.
    """

    where: WhereClause | None = None
    order: OrderSpec | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.limit is None:
            return
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise InvalidLimitError(
                f"Limit must be a positive integer, got {self.limit!r}"
            )
        if self.limit <= 0:
            raise InvalidLimitError(
                f"Limit must be a positive integer, got {self.limit}"
            )

    @property
    def is_empty(self) -> bool:
        return self.where is None and self.order is None and self.limit is None

    def echo(self) -> dict[str, Any]:
        """The query as it is echoed back in result envelopes."""
        return {
            "where": self.where.to_text() if self.where else None,
            "orderBy": self.order.to_text() if self.order else None,
            "limit": self.limit,
        }


@dataclass(frozen=True)
class ExecutionPlan:
    """
    Split of a ``QueryDescriptor`` into native and post-processing steps.

    Every clause of the source descriptor sits in exactly one slot: the
    where clause in ``native_where`` or ``post_filter`` (a strict inequality
    pushes only its inclusive approximation natively, so the original clause
    lives in ``post_filter``), the order in ``native_order`` or ``post_sort``
    and the limit in ``native_limit`` or ``post_limit``.

    Attributes:
        native_where: Filter sent to the backend.
        native_order: Ordering sent to the backend.
        native_limit: ``limit`` is applied by the backend.
        post_filter: Filter evaluated client-side.
        post_sort: Ordering applied client-side.
        post_limit: ``limit`` is applied client-side after filter and sort.
        limit: The requested limit, if any.
        notices: Non-fatal diagnostics about the chosen split.
    """

    native_where: WhereClause | None = None
    native_order: OrderSpec | None = None
    native_limit: bool = False
    post_filter: WhereClause | None = None
    post_sort: OrderSpec | None = None
    post_limit: bool = False
    limit: int | None = None
    notices: tuple[str, ...] = field(default_factory=tuple)

    @property
    def needs_post_processing(self) -> bool:
        return (
            self.post_filter is not None
            or self.post_sort is not None
            or self.post_limit
        )

    def describe(self) -> dict[str, Any]:
        """Serialise the split for debug logging."""
        return {
            "native": {
                "where": self.native_where.to_text() if self.native_where else None,
                "orderBy": self.native_order.to_text() if self.native_order else None,
                "limit": self.limit if self.native_limit else None,
            },
            "post": {
                "where": self.post_filter.to_text() if self.post_filter else None,
                "orderBy": self.post_sort.to_text() if self.post_sort else None,
                "limit": self.limit if self.post_limit else None,
            },
        }
