"""Firestore native query builder and read helpers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from google.cloud.firestore_v1.base_query import BaseQuery, FieldFilter

from ..exceptions import DocumentNotFoundError, UnsupportedOperatorError
from ..query.capabilities import FIRESTORE, BackendCapability
from ..query.operators import LIST_OPERATORS, QueryOperator
from ..query.values import as_list, split_path
from .base import SDK_ERRORS, backend_error

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore_v1.base_document import DocumentSnapshot

    from ..query.descriptor import ExecutionPlan, WhereClause

logger = logging.getLogger("firebase_tools_cli.backends")

BACKEND_NAME = FIRESTORE.name

# QueryOperator -> FieldFilter op string
NATIVE_OPERATORS: dict[QueryOperator, str] = {
    QueryOperator.EQ: "==",
    QueryOperator.NE: "!=",
    QueryOperator.LT: "<",
    QueryOperator.LE: "<=",
    QueryOperator.GT: ">",
    QueryOperator.GE: ">=",
    QueryOperator.ARRAY_CONTAINS: "array_contains",
    QueryOperator.ARRAY_CONTAINS_ANY: "array_contains_any",
    QueryOperator.IN: "in",
    QueryOperator.NOT_IN: "not-in",
}

SAMPLE_FIELD_COUNT = 5


def field_path(path: str) -> str:
    """Firestore addresses nested fields with dots."""
    return ".".join(split_path(path))


def document_record(snapshot: DocumentSnapshot) -> dict[str, Any]:
    return {
        "id": snapshot.id,
        "data": snapshot.to_dict() or {},
        "createTime": snapshot.create_time,
        "updateTime": snapshot.update_time,
    }


def document_data(record: Any) -> Any:
    """Extractor resolving post-processing paths inside a record's data."""
    return record.get("data") if isinstance(record, dict) else None


class FirestoreQueryBuilder:
    """Compiles the native half of an ExecutionPlan to a Firestore query."""

    def __init__(self, client: FirestoreClient) -> None:
        self._client = client

    @property
    def capabilities(self) -> BackendCapability:
        return FIRESTORE

    def _filter(self, where: WhereClause) -> FieldFilter:
        op = NATIVE_OPERATORS.get(where.operator)
        if op is None:
            raise UnsupportedOperatorError(
                where.operator.value, BACKEND_NAME, FIRESTORE.supported_operators
            )
        value = as_list(where.value) if where.operator in LIST_OPERATORS else where.value
        return FieldFilter(field_path(where.field_path), op, value)

    def build(self, collection_path: str, plan: ExecutionPlan) -> Any:
        """Build a query for *collection_path* from the plan's native slots."""
        query: Any = self._client.collection(collection_path)
        if plan.native_where is not None:
            query = query.where(filter=self._filter(plan.native_where))
        if plan.native_order is not None:
            direction = (
                BaseQuery.DESCENDING
                if plan.native_order.descending
                else BaseQuery.ASCENDING
            )
            query = query.order_by(
                field_path(plan.native_order.field_path), direction=direction
            )
        if plan.native_limit and plan.limit is not None:
            query = query.limit(plan.limit)
        return query

    def execute(self, collection_path: str, plan: ExecutionPlan) -> list[dict[str, Any]]:
        """Run the native query; one read per call."""
        query = self.build(collection_path, plan)
        logger.debug("Firestore query on %s: %s", collection_path, plan.describe())
        try:
            snapshots = list(query.stream())
        except SDK_ERRORS as e:
            raise backend_error(e, BACKEND_NAME) from e
        return [document_record(s) for s in snapshots]

    def get_document(self, document_path: str) -> dict[str, Any]:
        """Read one document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        try:
            snapshot = self._client.document(document_path).get()
        except SDK_ERRORS as e:
            raise backend_error(e, BACKEND_NAME) from e
        if not snapshot.exists:
            raise DocumentNotFoundError(document_path)
        return document_record(snapshot)


def list_collections(client: FirestoreClient) -> list[dict[str, Any]]:
    """Summarise root collections: document count and sample fields."""
    summaries: list[dict[str, Any]] = []
    try:
        for collection in client.collections():
            aggregate = collection.count().get()
            count = int(aggregate[0][0].value) if aggregate else 0
            first = next(iter(collection.limit(1).stream()), None)
            fields = list((first.to_dict() or {}).keys()) if first else []
            summaries.append(
                {
                    "name": collection.id,
                    "documentCount": count,
                    "sampleFields": fields[:SAMPLE_FIELD_COUNT],
                    "hasMoreFields": len(fields) > SAMPLE_FIELD_COUNT,
                }
            )
    except SDK_ERRORS as e:
        raise backend_error(e, BACKEND_NAME) from e
    return summaries
