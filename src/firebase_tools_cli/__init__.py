"""
firebase-tools-cli: a command-line client for Cloud Firestore and the
Firebase Realtime Database.

The ``query`` package holds the backend-independent translation layer;
``backends`` talks to Firebase; ``cli`` is the click application.
"""

from .exceptions import (
    BackendError,
    ConfigurationError,
    DocumentNotFoundError,
    FieldNotFoundError,
    FirebaseToolsError,
    InvalidDirectionError,
    InvalidLimitError,
    MalformedClauseError,
    QueryValidationError,
    UnknownOperatorError,
    UnsupportedOperatorError,
)

__version__ = "0.5.3"

__all__ = [
    "BackendError",
    "ConfigurationError",
    "DocumentNotFoundError",
    "FieldNotFoundError",
    "FirebaseToolsError",
    "InvalidDirectionError",
    "InvalidLimitError",
    "MalformedClauseError",
    "QueryValidationError",
    "UnknownOperatorError",
    "UnsupportedOperatorError",
    "__version__",
]
