"""
Query translation layer.

Parses the ``--where`` / ``--order-by`` / ``--limit`` grammar into a
``QueryDescriptor``, splits it per backend into an ``ExecutionPlan``,
reconciles whatever ran client-side and wraps the answer in a
``ResultEnvelope``. Nothing in this package talks to Firebase.
"""

from .capabilities import FIRESTORE, IN_MEMORY, REALTIME_DATABASE, BackendCapability
from .classifier import classify
from .descriptor import ExecutionPlan, OrderSpec, QueryDescriptor, WhereClause
from .envelope import ResultEnvelope, assemble, to_jsonable
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .operators import LIST_OPERATORS, QueryOperator, SortDirection
from .operators_memory import build_default_registry
from .post_processor import post_process
from .syntax import parse_limit, parse_order, parse_query, parse_where
from .values import coerce_value, resolve_path

__all__ = [
    "BackendCapability",
    "ExecutionPlan",
    "FIRESTORE",
    "IN_MEMORY",
    "LIST_OPERATORS",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "OrderSpec",
    "QueryDescriptor",
    "QueryOperator",
    "REALTIME_DATABASE",
    "ResultEnvelope",
    "SortDirection",
    "WhereClause",
    "assemble",
    "build_default_registry",
    "classify",
    "coerce_value",
    "parse_limit",
    "parse_order",
    "parse_query",
    "parse_where",
    "post_process",
    "resolve_path",
    "to_jsonable",
]
