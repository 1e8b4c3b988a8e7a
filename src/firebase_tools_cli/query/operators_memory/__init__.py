"""
In-memory operator implementations.

Provides concrete MemoryOperator subclasses for each QueryOperator
and a factory function to create registries.

Usage::

    from firebase_tools_cli.query.operators_memory import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(QueryOperator.EQ, actual, expected)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .set import (
    ArrayContainsAnyOperator,
    ArrayContainsOperator,
    InOperator,
    NotInOperator,
)
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry with all built-in operators.

    Returns:
        MemoryOperatorRegistry: A new registry instance with all operators.

    Example:
        >>> registry = build_default_registry()
        >>> registry.evaluate(QueryOperator.GE, 30, 18)
        True
    """
    registry = MemoryOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        # Set / array
        InOperator(),
        NotInOperator(),
        ArrayContainsOperator(),
        ArrayContainsAnyOperator(),
    )
    return registry


__all__ = [
    "build_default_registry",
    "MemoryOperatorRegistry",
]
