"""
Shared value helpers for the query package.

These are pure-Python helpers with no SDK dependencies.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

# Longest digit run that still round-trips through an IEEE double.
MAX_NUMERIC_DIGITS = 15

_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def coerce_value(raw: str) -> Any:
    """
    Coerce a raw clause value to a scalar.

    Order is fixed: ``"true"``/``"false"`` -> bool, ``"null"`` -> ``None``,
    a whole-string decimal number with at most ``MAX_NUMERIC_DIGITS``
    significant digits -> ``int``/``float``, anything else stays a string.
    """
    if raw == "true":
        return True
    if raw == "false":
        return False
    if raw == "null":
        return None
    if _DECIMAL_RE.match(raw) and _digit_count(raw) <= MAX_NUMERIC_DIGITS:
        if _INTEGER_RE.match(raw):
            return int(raw)
        number = float(raw)
        if not math.isinf(number):
            return number
    return raw


def _digit_count(raw: str) -> int:
    mantissa = re.split(r"[eE]", raw, maxsplit=1)[0]
    digits = "".join(ch for ch in mantissa if ch.isdigit()).lstrip("0")
    return len(digits)


def as_list(value: Any) -> list[Any]:
    """Wrap a scalar in a one-element list; pass collections through."""
    if isinstance(value, list | tuple | set | frozenset):
        return list(value)
    return [value]


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def split_path(field_path: str) -> list[str]:
    """Split a ``/``-separated field path, ignoring empty segments."""
    return [part for part in field_path.split("/") if part]


def resolve_path(record: Any, field_path: str) -> Any:
    """
    Resolve a ``/``-separated path inside a nested record.

    Mappings are indexed by key and lists by integer segment. A missing
    intermediate segment yields ``None`` ("no value") instead of raising.
    """
    current = record
    for part in split_path(field_path):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, list | tuple):
            if not part.lstrip("-").isdigit():
                return None
            index = int(part)
            if not -len(current) <= index < len(current):
                return None
            current = current[index]
        else:
            return None
    return current


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def type_rank(value: Any) -> int:
    """Rank values by type so heterogeneous fields sort deterministically."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        return 1
    if isinstance(value, str):
        return 2
    return 3


def sort_key(value: Any) -> tuple[int, Any]:
    """Key for sorting present values; non-scalars compare equal within rank."""
    rank = type_rank(value)
    return (rank, value if rank < 3 else 0)


def comparable(left: Any, right: Any) -> bool:
    """True when two values may be ordered against each other."""
    return type_rank(left) == type_rank(right) and type_rank(left) < 3
