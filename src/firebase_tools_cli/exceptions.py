"""
Exception hierarchy for firebase-tools-cli.

All exceptions inherit from ``FirebaseToolsError`` and provide
``to_dict()`` so the CLI can emit them as JSON as well as text.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class FirebaseToolsError(Exception):
    """Root exception for the entire firebase-tools-cli package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class QueryValidationError(FirebaseToolsError):
    """A query clause failed validation before any backend call."""

    def __init__(self, message: str, clause: str | None = None) -> None:
        self.message = message
        self.clause = clause
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "clause": self.clause,
        }


class MalformedClauseError(QueryValidationError):
    """A where/order clause does not split into the required segments."""


class UnknownOperatorError(MalformedClauseError):
    """
    Unknown where operator.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(
        self, operator: str, valid_operators: list[str], clause: str | None = None
    ) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(valid_operators)}"
        super().__init__(message, clause=clause)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": list(self.valid_operators),
        }


class InvalidDirectionError(QueryValidationError):
    """Order direction is neither ``asc`` nor ``desc``."""


class InvalidLimitError(QueryValidationError):
    """Limit is non-numeric or non-positive."""


class UnsupportedOperatorError(FirebaseToolsError):
    """The operator has no native or client-side equivalent on a backend."""

    def __init__(
        self, operator: str, backend: str, supported: list[str] | None = None
    ) -> None:
        self.operator = operator
        self.backend = backend
        self.supported = supported or []
        message = f"Unsupported operator for {backend}: '{operator}'."
        if self.supported:
            message += f" Supported: {', '.join(self.supported)}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPERATOR",
            "operator": self.operator,
            "backend": self.backend,
            "supported": self.supported,
        }


class BackendError(FirebaseToolsError):
    """
    A native backend call failed.

    The underlying SDK message is preserved verbatim; ``hints`` carries
    remediation advice derived from it for the caller to print.
    """

    def __init__(
        self, message: str, backend: str, hints: list[str] | None = None
    ) -> None:
        self.message = message
        self.backend = backend
        self.hints = hints or []
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "BACKEND_ERROR",
            "backend": self.backend,
            "message": self.message,
            "hints": self.hints,
        }


class ConfigurationError(FirebaseToolsError):
    """Raised when configuration is missing, unreadable or invalid."""


class DocumentNotFoundError(FirebaseToolsError):
    """Raised when a Firestore document does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Document not found: {path}")


class FieldNotFoundError(FirebaseToolsError):
    """
    Field path does not exist in a document, with helpful suggestions.

    Example error message::

        Field 'profle' not found in 'users/u1'.
        Did you mean one of these?
          • profile

        Available fields: email, name, profile
    """

    def __init__(
        self,
        field_path: str,
        document_path: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.field_path = field_path
        self.document_path = document_path
        self.available_fields = available_fields
        self.suggestions = get_close_matches(
            field_path, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [f"Field '{self.field_path}' not found in '{self.document_path}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.field_path,
            "document": self.document_path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }
