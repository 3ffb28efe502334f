"""Database infrastructure for the proxy account synchronizer.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the accounts database. It belongs to the infrastructure
layer because it deals with an external system.
"""

import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


ACCOUNTS_DB_URL_ENV = "PROXY_DB_URL"


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=2,
        max_overflow=2,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


_accounts_engine: Optional[Engine] = None


def get_accounts_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the accounts database.

    Returns:
        Engine: Lazily initialized engine connected to the source of truth.
    """
    global _accounts_engine
    if _accounts_engine is None:
        db_url = _get_env_var(ACCOUNTS_DB_URL_ENV)
        _accounts_engine = _create_engine(db_url)
    return _accounts_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    """

    def get_accounts_engine(self) -> Engine:
        """Get the engine for the accounts database.

        Returns:
            Engine: SQLAlchemy engine connected to the accounts database.
        """
        return get_accounts_engine()


__all__ = [
    "get_accounts_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
