"""
CLI Context for managing application dependencies.

Keeps settings loading and facade construction out of the individual
commands, so the store client is chosen in one place.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .operations.facade import Operations
from .settings import Settings, create_settings_from_env
from .storage.s3_client import connect
from .transfer import ClientFactory


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    Settings are loaded once per command; the Operations facade is created
    lazily on first access.
    """
    settings: Settings
    client_factory: ClientFactory = connect
    _operations: Optional[Operations] = None

    @staticmethod
    def default_client_factory() -> ClientFactory:
        """Client factory for contexts built by from_env()."""
        return connect

    @classmethod
    def from_env(cls) -> CLIContext:
        """
        Create CLI context from environment variables.

        Raises:
            ValueError: If required CEPH_* variables are missing or invalid
        """
        return cls(settings=create_settings_from_env(), client_factory=cls.default_client_factory())

    @property
    def operations(self) -> Operations:
        if self._operations is None:
            self._operations = Operations(self.settings, client_factory=self.client_factory)
        return self._operations
