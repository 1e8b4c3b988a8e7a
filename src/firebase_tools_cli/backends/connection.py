"""FirebaseConnection: an explicit Firebase app handle for one invocation."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

import firebase_admin
from firebase_admin import credentials, db, firestore

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from types import TracebackType

    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger("firebase_tools_cli.backends")


class FirebaseConnection:
    """Wrap ``firebase_admin.App`` lifecycle behind an explicit handle.

    Each connection initialises its own uniquely named app, so nothing is
    looked up through the SDK's global default app, and deletes it on
    :meth:`close`.
    """

    def __init__(
        self,
        *,
        service_account_path: str | None = None,
        project_id: str | None = None,
        database_url: str | None = None,
        name: str | None = None,
    ) -> None:
        self._service_account_path = service_account_path
        self._project_id = project_id
        self._database_url = database_url
        self._name = name or f"firebase-tools-cli-{uuid.uuid4().hex[:12]}"
        self._app: firebase_admin.App | None = None

    @property
    def database_url(self) -> str | None:
        return self._database_url

    @property
    def project_id(self) -> str | None:
        if self._app is not None and self._app.project_id:
            return str(self._app.project_id)
        return self._project_id

    def _credential(self) -> credentials.Base:
        if self._service_account_path:
            try:
                return credentials.Certificate(self._service_account_path)
            except (OSError, ValueError) as e:
                raise ConfigurationError(
                    f"Could not load service account key "
                    f"'{self._service_account_path}': {e}"
                ) from e
        return credentials.ApplicationDefault()

    def connect(self) -> firebase_admin.App:
        """Initialise the Firebase app. Idempotent."""
        if self._app is not None:
            return self._app
        options: dict[str, Any] = {}
        if self._project_id:
            options["projectId"] = self._project_id
        if self._database_url:
            options["databaseURL"] = self._database_url
        self._app = firebase_admin.initialize_app(
            self._credential(), options, name=self._name
        )
        logger.debug("Initialised Firebase app %s with %s", self._name, options)
        return self._app

    @property
    def app(self) -> firebase_admin.App:
        """Return the app; raises if not connected."""
        if self._app is None:
            raise ConfigurationError("Not connected; call connect() first")
        return self._app

    def firestore(self) -> FirestoreClient:
        return firestore.client(app=self.connect())

    def reference(self, path: str = "/") -> db.Reference:
        """Return a Realtime Database reference to *path*."""
        if not self._database_url:
            raise ConfigurationError(
                "Realtime Database URL is required; pass --database-url, set "
                "FIREBASE_DATABASE_URL or run config:set --database-url"
            )
        return db.reference(path, app=self.connect())

    def close(self) -> None:
        """Delete the app and release its resources."""
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            logger.debug("Deleted Firebase app %s", self._name)
            self._app = None

    def __enter__(self) -> FirebaseConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
