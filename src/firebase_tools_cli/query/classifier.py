"""Capability classifier: split a QueryDescriptor into an ExecutionPlan."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import UnsupportedOperatorError
from .descriptor import ExecutionPlan
from .operators import QueryOperator
from .values import split_path

if TYPE_CHECKING:
    from .capabilities import BackendCapability
    from .descriptor import OrderSpec, QueryDescriptor, WhereClause

# Operators that still make sense against a missing value
_ABSENCE_OPERATORS = frozenset({QueryOperator.EQ, QueryOperator.NE})

CROSS_FIELD_NOTICE = (
    "{backend} cannot order by one field and filter by another in the same "
    "query; filtering natively on '{where}' and sorting on '{order}' "
    "after the results arrive."
)


def classify(descriptor: QueryDescriptor, caps: BackendCapability) -> ExecutionPlan:
    """
    Decide which parts of *descriptor* run natively on a backend.

    Pure function of its inputs; raises :class:`UnsupportedOperatorError`
    before any backend call when the filter cannot be honoured at all.
    """
    where, order, limit = descriptor.where, descriptor.order, descriptor.limit
    if where is None and order is None:
        return ExecutionPlan(
            native_limit=limit is not None and caps.native_limit,
            post_limit=limit is not None and not caps.native_limit,
            limit=limit,
        )

    notices: list[str] = []
    native_where, post_filter = _split_where(where, caps) if where else (None, None)
    native_order, post_sort = (
        _split_order(order, native_where, caps, notices) if order else (None, None)
    )

    post_step = (
        post_filter is not None or post_sort is not None or not caps.native_limit
    )
    return ExecutionPlan(
        native_where=native_where,
        native_order=native_order,
        native_limit=limit is not None and not post_step,
        post_filter=post_filter,
        post_sort=post_sort,
        post_limit=limit is not None and post_step,
        limit=limit,
        notices=tuple(notices),
    )


def _split_where(
    where: WhereClause, caps: BackendCapability
) -> tuple[WhereClause | None, WhereClause | None]:
    op = where.operator
    if where.value is None and not caps.null_bounds:
        if op in _ABSENCE_OPERATORS:
            return None, where
        raise UnsupportedOperatorError(
            f"{op.value} null", caps.name, ["== null", "!= null"]
        )
    if op in caps.native_operators:
        return where, None
    if op in caps.approximated_operators:
        return where.with_operator(caps.approximated_operators[op]), where
    if op in caps.client_operators:
        return None, where
    raise UnsupportedOperatorError(op.value, caps.name, caps.supported_operators)


def _split_order(
    order: OrderSpec,
    native_where: WhereClause | None,
    caps: BackendCapability,
    notices: list[str],
) -> tuple[OrderSpec | None, OrderSpec | None]:
    # Only a filter the backend runs itself constrains the native ordering
    cross_field = (
        native_where is not None
        and native_where.segments != split_path(order.field_path)
    )
    if cross_field and not caps.different_field_filter_and_sort:
        notices.append(
            CROSS_FIELD_NOTICE.format(
                backend=caps.name,
                where=native_where.field_path if native_where else "",
                order=order.field_path,
            )
        )
        return None, order
    if not caps.native_ordering or not caps.preserves_order:
        return None, order
    return order, None
