"""
Query orchestration: parse, classify, execute natively, reconcile, assemble.

Each ``run_*`` function performs exactly one native read and returns a
:class:`ResultEnvelope`; validation failures surface before the read.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..backends.firestore import FirestoreQueryBuilder, document_data
from ..backends.rtdb import RtdbQueryBuilder
from ..exceptions import ConfigurationError, FieldNotFoundError
from ..query.capabilities import FIRESTORE, IN_MEMORY, REALTIME_DATABASE
from ..query.classifier import classify
from ..query.envelope import assemble
from ..query.post_processor import post_process
from ..query.values import resolve_path

if TYPE_CHECKING:
    from ..backends.connection import FirebaseConnection
    from ..query.capabilities import BackendCapability
    from ..query.descriptor import ExecutionPlan, QueryDescriptor
    from ..query.envelope import ResultEnvelope
    from ..query.evaluator import MemoryOperatorRegistry

logger = logging.getLogger("firebase_tools_cli.actions")


def plan_for(descriptor: QueryDescriptor, caps: BackendCapability) -> ExecutionPlan:
    """Classify *descriptor* and report the plan's notices."""
    plan = classify(descriptor, caps)
    for notice in plan.notices:
        logger.warning(notice)
    logger.debug("Execution plan for %s: %s", caps.name, plan.describe())
    return plan


# ---------------------------------------------------------------------------
# Realtime Database
# ---------------------------------------------------------------------------


def run_rtdb_query(
    connection: FirebaseConnection,
    path: str,
    descriptor: QueryDescriptor,
    *,
    registry: MemoryOperatorRegistry | None = None,
) -> ResultEnvelope:
    """Query the tree store at *path*."""
    plan = plan_for(descriptor, REALTIME_DATABASE)
    raw = RtdbQueryBuilder(connection.reference).execute(path, plan)
    processed = post_process(raw, plan, registry=registry)
    # Tree-store paths are reported from the database root
    root_path = "/" + path.strip("/")
    return assemble(connection.database_url or "", root_path, descriptor, processed)


# ---------------------------------------------------------------------------
# Firestore
# ---------------------------------------------------------------------------


def _field_segments(field: str) -> str:
    """Accept both ``a.b.0`` and ``a/b/0`` for document fields."""
    return field.replace(".", "/")


def run_firestore_query(
    connection: FirebaseConnection,
    segments: list[str],
    descriptor: QueryDescriptor,
    *,
    field: str | None = None,
    registry: MemoryOperatorRegistry | None = None,
) -> ResultEnvelope:
    """
    Query a collection or read a document.

    An odd number of *segments* addresses a collection, an even number a
    document. ``field`` selects a value inside a document; when that value
    is an array the query options are applied to it in memory.

    Raises:
        ConfigurationError: If ``field`` is given for a collection path.
        DocumentNotFoundError: If the document does not exist.
        FieldNotFoundError: If ``field`` does not resolve in the document.
    """
    path = "/".join(s.strip("/") for s in segments)
    builder = FirestoreQueryBuilder(connection.firestore())
    source = connection.project_id or ""

    if len(segments) % 2 == 1:
        if field:
            raise ConfigurationError(
                "--field only applies to document paths (even number of segments)"
            )
        plan = plan_for(descriptor, FIRESTORE)
        records = builder.execute(path, plan)
        processed = post_process(
            records, plan, registry=registry, extract=document_data
        )
        return assemble(source, path, descriptor, processed)

    document = builder.get_document(path)
    if not field:
        _ignore_options(descriptor, "document reads")
        return assemble(source, path, descriptor, document, single=True)

    value = resolve_path(document["data"], _field_segments(field))
    if value is None:
        raise FieldNotFoundError(field, path, list(document["data"].keys()))
    if isinstance(value, list) and not descriptor.is_empty:
        plan = plan_for(descriptor, IN_MEMORY)
        processed = post_process(value, plan, registry=registry)
        return assemble(source, f"{path}/{field}", descriptor, processed)

    if not isinstance(value, list):
        _ignore_options(descriptor, "non-array fields")
    return assemble(
        source, f"{path}/{field}", descriptor, value, single=isinstance(value, dict)
    )


def _ignore_options(descriptor: QueryDescriptor, target: str) -> None:
    if not descriptor.is_empty:
        logger.warning(
            "Query options (--where, --order-by, --limit) are ignored for %s; "
            "they apply to collections and array fields",
            target,
        )
