"""Standard comparison operators: ==, !=, <, <=, >, >=."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from ..evaluator import MemoryOperator, same_value
from ..operators import QueryOperator
from ..values import comparable


class EqualOperator(MemoryOperator):
    """``== null`` matches records where the field is absent."""

    operator = QueryOperator.EQ
    matches_absent = True

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return same_value(field_value, condition_value)


class NotEqualOperator(MemoryOperator):
    """``!= null`` matches records where the field is present."""

    operator = QueryOperator.NE
    matches_null = True

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return not same_value(field_value, condition_value)


class _OrderingOperator(MemoryOperator):
    # Values of different types never satisfy an inequality
    def compare(self, field_value: Any, condition_value: Any) -> bool:
        if not comparable(field_value, condition_value):
            return False
        return self.holds(field_value, condition_value)

    @abstractmethod
    def holds(self, field_value: Any, condition_value: Any) -> bool: ...


class LessThanOperator(_OrderingOperator):
    operator = QueryOperator.LT

    def holds(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value < condition_value)


class LessEqualOperator(_OrderingOperator):
    operator = QueryOperator.LE

    def holds(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value <= condition_value)


class GreaterThanOperator(_OrderingOperator):
    operator = QueryOperator.GT

    def holds(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value > condition_value)


class GreaterEqualOperator(_OrderingOperator):
    operator = QueryOperator.GE

    def holds(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value >= condition_value)
