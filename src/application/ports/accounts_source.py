"""Ports for the source-of-truth accounts table."""

from typing import Protocol

from src.domain.models.accounts import ProxyAccount, TrafficSample


class AccountsSourceError(RuntimeError):
    """Raised when enabled accounts cannot be read from the source."""


class TrafficLedgerError(RuntimeError):
    """Raised when traffic cannot be added to an account's counters."""


class AccountsSourcePort(Protocol):
    """Port exposing read access to enabled accounts."""

    def fetch_enabled_accounts(self) -> list[ProxyAccount]:
        """Return every account currently enabled in the source of truth.

        Raises:
            AccountsSourceError: If the source cannot be queried.
        """


class TrafficLedgerPort(Protocol):
    """Port exposing cumulative traffic counters of accounts."""

    def add_traffic(self, email: str, sample: TrafficSample) -> None:
        """Add a traffic sample to the cumulative counters of an account.

        Raises:
            TrafficLedgerError: If the increment cannot be written.
        """


__all__ = [
    "AccountsSourceError",
    "AccountsSourcePort",
    "TrafficLedgerError",
    "TrafficLedgerPort",
]
