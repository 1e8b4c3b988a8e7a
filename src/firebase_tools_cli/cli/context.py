"""Per-invocation CLI state shared by every command."""

from __future__ import annotations

from dataclasses import dataclass, field

import click

from ..backends.connection import FirebaseConnection
from ..config import CliConfig, validate_database_url


@dataclass
class CliContext:
    """Global options resolved against the saved configuration.

    Flags and environment variables arrive through click; whatever they
    leave unset falls back to ``config``.
    """

    service_account: str | None = None
    project: str | None = None
    config: CliConfig = field(default_factory=CliConfig)

    @property
    def service_account_path(self) -> str | None:
        return self.service_account or self.config.service_account_path

    @property
    def project_id(self) -> str | None:
        return self.project or self.config.default_project

    def resolve_database_url(self, database_url: str | None = None) -> str | None:
        if database_url:
            return validate_database_url(database_url)
        return self.config.database_url

    def connect(self, *, database_url: str | None = None) -> FirebaseConnection:
        """Create a connection handle; callers close it with ``with``."""
        return FirebaseConnection(
            service_account_path=self.service_account_path,
            project_id=self.project_id,
            database_url=self.resolve_database_url(database_url),
        )


pass_cli_context = click.make_pass_decorator(CliContext)
