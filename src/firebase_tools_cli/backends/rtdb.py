"""Realtime Database native query builder and tree summaries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from ..exceptions import UnsupportedOperatorError
from ..query.capabilities import REALTIME_DATABASE, BackendCapability
from ..query.operators import QueryOperator
from .base import SDK_ERRORS, backend_error

if TYPE_CHECKING:
    from firebase_admin import db

    from ..query.descriptor import ExecutionPlan, WhereClause

logger = logging.getLogger("firebase_tools_cli.backends")

BACKEND_NAME = REALTIME_DATABASE.name

SAMPLE_KEY_COUNT = 3
VALUE_PREVIEW_LENGTH = 50

ReferenceFactory = Callable[[str], "db.Reference"]


class RtdbQueryBuilder:
    """Compiles the native half of an ExecutionPlan to a Realtime Database query.

    The tree store takes one ``order_by_*`` per query and bounds it with
    ``equal_to`` / ``start_at`` / ``end_at``; strict inequalities arrive
    here already widened to their inclusive bound.
    """

    def __init__(self, reference: ReferenceFactory) -> None:
        self._reference = reference

    @property
    def capabilities(self) -> BackendCapability:
        return REALTIME_DATABASE

    @staticmethod
    def _bound(query: Any, where: WhereClause) -> Any:
        op = where.operator
        if op is QueryOperator.EQ:
            return query.equal_to(where.value)
        if op is QueryOperator.GE:
            return query.start_at(where.value)
        if op is QueryOperator.LE:
            return query.end_at(where.value)
        raise UnsupportedOperatorError(
            op.value, BACKEND_NAME, REALTIME_DATABASE.supported_operators
        )

    def build(self, path: str, plan: ExecutionPlan) -> Any:
        ref = self._reference(path)
        limit = plan.limit if plan.native_limit else None

        if plan.native_where is not None:
            query = self._bound(
                ref.order_by_child(plan.native_where.field_path), plan.native_where
            )
        elif plan.native_order is not None:
            query = ref.order_by_child(plan.native_order.field_path)
        elif limit is not None:
            query = ref.order_by_key()
        else:
            return ref

        if limit is not None:
            query = query.limit_to_first(limit)
        return query

    def execute(self, path: str, plan: ExecutionPlan) -> Any:
        """Run the native query; one read per call."""
        query = self.build(path, plan)
        logger.debug("Realtime Database query on %s: %s", path, plan.describe())
        try:
            return query.get()
        except SDK_ERRORS as e:
            raise backend_error(e, BACKEND_NAME) from e


def read_tree(reference: ReferenceFactory, path: str = "/") -> Any:
    try:
        return reference(path).get()
    except SDK_ERRORS as e:
        raise backend_error(e, BACKEND_NAME) from e


def _children(value: Any) -> list[Any]:
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, list):
        return list(value)
    return []


def count_nodes(data: Any) -> int:
    """Count every object and leaf value in a tree; ``None`` counts as 0."""
    if data is None:
        return 0
    if isinstance(data, Mapping | list):
        return 1 + sum(count_nodes(child) for child in _children(data))
    return 1


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _type_name(value: Any) -> str:
    if isinstance(value, Mapping | list):
        return "object"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    return "string"


def summarize_nodes(data: Any) -> list[dict[str, Any]]:
    """Describe each top-level node of a tree."""
    if not isinstance(data, Mapping):
        return []
    nodes: list[dict[str, Any]] = []
    for name, value in data.items():
        node: dict[str, Any] = {"name": name, "type": _type_name(value)}
        if isinstance(value, Mapping | list):
            keys = (
                [str(k) for k in value]
                if isinstance(value, Mapping)
                else [str(i) for i in range(len(value))]
            )
            node["childCount"] = len(keys)
            node["sampleKeys"] = keys[:SAMPLE_KEY_COUNT]
            if len(keys) > SAMPLE_KEY_COUNT:
                node["hasMoreKeys"] = True
        else:
            text = _display(value)
            node["value"] = text[:VALUE_PREVIEW_LENGTH]
            if len(text) > VALUE_PREVIEW_LENGTH:
                node["truncated"] = True
        nodes.append(node)
    return nodes
