"""
Backend capability declarations.

The classifier is written against ``BackendCapability`` only; adding a
backend means declaring one more instance here rather than branching on
backend names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .operators import QueryOperator

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class BackendCapability:
    """
    What a backend can execute natively.

    Attributes:
        name: Human-readable backend name used in messages.
        native_operators: Operators the backend evaluates itself.
        approximated_operators: Strict operators the backend can only bound
            inclusively, mapped to the inclusive operator to push down.
        client_operators: Operators evaluated client-side only.
        different_field_filter_and_sort: Filter and order may target
            different fields in one native query.
        native_ordering: The backend accepts an ordering at all.
        preserves_order: Results are delivered in the requested order.
        null_bounds: ``None`` is accepted as a native filter value.
        native_limit: The backend can truncate results itself.
    """

    name: str
    native_operators: frozenset[QueryOperator] = frozenset()
    approximated_operators: Mapping[QueryOperator, QueryOperator] = field(
        default_factory=lambda: MappingProxyType({})
    )
    client_operators: frozenset[QueryOperator] = frozenset()
    different_field_filter_and_sort: bool = True
    native_ordering: bool = True
    preserves_order: bool = True
    null_bounds: bool = True
    native_limit: bool = True

    @property
    def supported_operators(self) -> list[str]:
        ops = (
            set(self.native_operators)
            | set(self.approximated_operators)
            | set(self.client_operators)
        )
        return [op.value for op in QueryOperator if op in ops]


FIRESTORE = BackendCapability(
    name="Firestore",
    native_operators=frozenset(QueryOperator),
)

REALTIME_DATABASE = BackendCapability(
    name="Realtime Database",
    native_operators=frozenset({QueryOperator.EQ, QueryOperator.GE, QueryOperator.LE}),
    approximated_operators=MappingProxyType(
        {QueryOperator.GT: QueryOperator.GE, QueryOperator.LT: QueryOperator.LE}
    ),
    different_field_filter_and_sort=False,
    preserves_order=False,
    null_bounds=False,
)

# Records already held client-side, e.g. an array field of one document.
IN_MEMORY = BackendCapability(
    name="in-memory",
    client_operators=frozenset(QueryOperator),
    native_ordering=False,
    native_limit=False,
)
