"""Firebase backends: connection handle and native query builders."""

from .base import QueryBackend, backend_error, remediation_hints
from .connection import FirebaseConnection
from .firestore import FirestoreQueryBuilder, list_collections
from .rtdb import RtdbQueryBuilder, count_nodes, read_tree, summarize_nodes

__all__ = [
    "FirebaseConnection",
    "FirestoreQueryBuilder",
    "QueryBackend",
    "RtdbQueryBuilder",
    "backend_error",
    "count_nodes",
    "list_collections",
    "read_tree",
    "remediation_hints",
    "summarize_nodes",
]
