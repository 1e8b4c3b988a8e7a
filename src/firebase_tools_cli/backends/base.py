"""Shared backend protocol and SDK error translation."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from firebase_admin.exceptions import FirebaseError
from google.api_core.exceptions import GoogleAPICallError

from ..exceptions import BackendError

if TYPE_CHECKING:
    from ..query.capabilities import BackendCapability
    from ..query.descriptor import ExecutionPlan

logger = logging.getLogger("firebase_tools_cli.backends")

# Exceptions a native read may raise; anything else is a programming error.
SDK_ERRORS: tuple[type[Exception], ...] = (FirebaseError, GoogleAPICallError)

_PERMISSION_HINTS = {
    "Realtime Database": [
        "Your account has Realtime Database read access",
        "Database rules allow read access to the specified path",
    ],
    "Firestore": [
        "Your account has the Cloud Datastore User (or Viewer) IAM role",
        "Firestore security rules allow reads on this collection",
    ],
}

_PERMISSION_TOKENS = ("PERMISSION_DENIED", "INSUFFICIENT_PERMISSIONS", "UNAUTHORIZED")

_INDEX_HINTS = {
    "Realtime Database": [
        "Add an \".indexOn\" rule for the filtered field in Firebase Console",
    ],
    "Firestore": [
        "Create the composite index using the link in the error message",
    ],
}


@runtime_checkable
class QueryBackend(Protocol):
    """A database that can run the native half of an execution plan."""

    @property
    def capabilities(self) -> BackendCapability: ...

    def execute(self, path: str, plan: ExecutionPlan) -> Any: ...


def _normalise(text: str) -> str:
    return re.sub(r"[\s-]+", "_", text.upper())


def remediation_hints(message: str, backend: str) -> list[str]:
    """Derive remediation advice from an SDK error message."""
    text = _normalise(message)
    if any(token in text for token in _PERMISSION_TOKENS):
        return list(_PERMISSION_HINTS.get(backend, []))
    if "INDEX_NOT_DEFINED" in text or "REQUIRES_AN_INDEX" in text:
        return list(_INDEX_HINTS.get(backend, []))
    return []


def backend_error(exc: Exception, backend: str) -> BackendError:
    """Translate an SDK exception into :class:`BackendError`."""
    message = str(exc)
    status = getattr(exc, "grpc_status_code", None)
    code = status.name if status is not None else getattr(exc, "code", None)
    hints = remediation_hints(f"{code or ''} {message}", backend)
    logger.debug("%s call failed (code=%s): %s", backend, code, message)
    return BackendError(message, backend, hints)
