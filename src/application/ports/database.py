"""Database ports for the proxy account synchronizer.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the accounts database.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_accounts_engine(self) -> Engine:
        """Get the engine for the accounts database.

        Returns:
            Engine: SQLAlchemy engine connected to the source of truth.
        """


__all__ = ["DatabaseEnginePort"]
