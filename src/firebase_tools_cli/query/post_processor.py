"""
Client-side reconciliation of what a backend could not do natively.

Applies an :class:`ExecutionPlan`'s post steps, in order: filter, sort,
then truncate to ``limit``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .operators_memory import build_default_registry
from .values import resolve_path, sort_key

if TYPE_CHECKING:
    from .descriptor import ExecutionPlan, OrderSpec, WhereClause
    from .evaluator import MemoryOperatorRegistry

logger = logging.getLogger("firebase_tools_cli.query")

Extractor = Callable[[Any], Any]


def post_process(
    raw: Any,
    plan: ExecutionPlan,
    *,
    registry: MemoryOperatorRegistry | None = None,
    extract: Extractor | None = None,
) -> Any:
    """
    Apply *plan*'s post-filter, post-sort and post-limit to *raw*.

    Args:
        raw: A mapping of key -> record, a list of records, a primitive
            or ``None``. Only mappings and lists are record sets.
        plan: The execution plan produced by the classifier.
        registry: Operator strategies; defaults to the built-in registry.
        extract: Maps a record to the value field paths resolve against.

    Returns:
        A ``dict`` (insertion-ordered) for mapping input, a ``list`` for list
        input, or *raw* unchanged when it is not a record set or the plan
        has no post steps.
    """
    if not plan.needs_post_processing:
        return raw
    if isinstance(raw, Mapping):
        entries: list[tuple[Any, Any]] = list(raw.items())
    elif isinstance(raw, list | tuple):
        entries = list(enumerate(raw))
    else:
        return raw

    extract = extract or _identity
    before = len(entries)

    if plan.post_filter is not None:
        entries = _filter(entries, plan.post_filter, registry, extract)
    if plan.post_sort is not None:
        entries = _sort(entries, plan.post_sort, extract)
    if plan.post_limit and plan.limit is not None:
        entries = entries[: plan.limit]

    logger.debug("Post-processed %d record(s) into %d", before, len(entries))

    if isinstance(raw, Mapping):
        return dict(entries)
    return [record for _, record in entries]


def _identity(record: Any) -> Any:
    return record


def _filter(
    entries: list[tuple[Any, Any]],
    where: WhereClause,
    registry: MemoryOperatorRegistry | None,
    extract: Extractor,
) -> list[tuple[Any, Any]]:
    registry = registry or build_default_registry()
    return [
        (key, record)
        for key, record in entries
        if registry.evaluate(
            where.operator,
            resolve_path(extract(record), where.field_path),
            where.value,
        )
    ]


def _sort(
    entries: list[tuple[Any, Any]],
    order: OrderSpec,
    extract: Extractor,
) -> list[tuple[Any, Any]]:
    present: list[tuple[Any, tuple[Any, Any]]] = []
    missing: list[tuple[Any, Any]] = []
    for entry in entries:
        value = resolve_path(extract(entry[1]), order.field_path)
        if value is None:
            missing.append(entry)
        else:
            present.append((sort_key(value), entry))

    # list.sort keeps equal keys in input order even with reverse=True
    present.sort(key=lambda item: item[0], reverse=order.descending)
    return [entry for _, entry in present] + missing
