from enum import Enum


class QueryOperator(str, Enum):
    """Where-clause operators accepted on the command line."""

    # Standard comparison
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    # Array membership
    ARRAY_CONTAINS = "array-contains"
    ARRAY_CONTAINS_ANY = "array-contains-any"

    # Set membership
    IN = "in"
    NOT_IN = "not-in"


class SortDirection(str, Enum):
    """Ordering direction for ``--order-by``."""

    ASC = "asc"
    DESC = "desc"


# Operators whose condition value is a list of candidates
LIST_OPERATORS: frozenset[QueryOperator] = frozenset(
    {QueryOperator.ARRAY_CONTAINS_ANY, QueryOperator.IN, QueryOperator.NOT_IN}
)
