"""Command actions: everything a CLI command does besides rendering."""

from .query import plan_for, run_firestore_query, run_rtdb_query
from .remote_config import convert_to_remote_config

__all__ = [
    "convert_to_remote_config",
    "plan_for",
    "run_firestore_query",
    "run_rtdb_query",
]
