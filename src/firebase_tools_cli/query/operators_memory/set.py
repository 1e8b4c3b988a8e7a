"""Set and array operators: in, not-in, array-contains, array-contains-any."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator, same_value
from ..operators import QueryOperator
from ..values import as_list


def _member(value: Any, candidates: list[Any]) -> bool:
    return any(same_value(value, candidate) for candidate in candidates)


class InOperator(MemoryOperator):
    operator = QueryOperator.IN

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return _member(field_value, as_list(condition_value))


class NotInOperator(MemoryOperator):
    """Absent fields never match, mirroring Firestore ``not-in``."""

    operator = QueryOperator.NOT_IN
    matches_null = True

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return not _member(field_value, as_list(condition_value))


class ArrayContainsOperator(MemoryOperator):
    operator = QueryOperator.ARRAY_CONTAINS

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        if not isinstance(field_value, list | tuple):
            return False
        return _member(condition_value, list(field_value))


class ArrayContainsAnyOperator(MemoryOperator):
    operator = QueryOperator.ARRAY_CONTAINS_ANY

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        if not isinstance(field_value, list | tuple):
            return False
        items = list(field_value)
        return any(_member(candidate, items) for candidate in as_list(condition_value))
