"""
Client-side evaluation of where clauses.

Backends answer part of a query natively; whatever is left over is
checked record by record here. ``MemoryOperator`` owns the rules every
operator shares (how an absent field and a ``null`` condition behave,
booleans never equalling numbers) so subclasses only compare two present
values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from ..exceptions import UnsupportedOperatorError

if TYPE_CHECKING:
    from .operators import QueryOperator

IN_MEMORY_BACKEND = "in-memory"


def same_value(left: Any, right: Any) -> bool:
    """Equality as the databases see it: ``True`` is not ``1``."""
    if isinstance(left, bool) is not isinstance(right, bool):
        return False
    return bool(left == right)


class MemoryOperator(ABC):
    """
    One where operator evaluated against a resolved field value.

    Subclasses set ``operator`` and implement :meth:`compare`. An absent
    field (``None``) yields ``matches_absent`` against a ``null`` condition
    and never matches otherwise; a present field compared with ``null``
    yields ``matches_null``.
    """

    operator: ClassVar[QueryOperator]
    matches_absent: ClassVar[bool] = False
    matches_null: ClassVar[bool] = False

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return condition_value is None and self.matches_absent
        if condition_value is None:
            return self.matches_null
        return self.compare(field_value, condition_value)

    @abstractmethod
    def compare(self, field_value: Any, condition_value: Any) -> bool:
        """Compare two present values."""


class MemoryOperatorRegistry:
    """
    Operator strategies keyed by ``QueryOperator``.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register_all(EqualOperator(), InOperator())

        registry.evaluate(QueryOperator.EQ, record_value, clause.value)
    """

    def __init__(self) -> None:
        self._operators: dict[QueryOperator, MemoryOperator] = {}

    def register_all(self, *operators: MemoryOperator) -> None:
        for op in operators:
            self._operators[op.operator] = op

    @property
    def supported_operators(self) -> set[QueryOperator]:
        return set(self._operators)

    def evaluate(
        self,
        operator: QueryOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Evaluate *operator* for one record.

        Raises:
            UnsupportedOperatorError: If no strategy is registered for it.
        """
        strategy = self._operators.get(operator)
        if strategy is None:
            raise UnsupportedOperatorError(
                operator.value,
                IN_MEMORY_BACKEND,
                sorted(op.value for op in self._operators),
            )
        return strategy.evaluate(field_value, condition_value)
