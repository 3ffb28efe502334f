"""Port for the proxy administrative API."""

from typing import Protocol

from src.domain.models.accounts import ProxyAccount


class ControlPlaneError(RuntimeError):
    """Raised when a control plane call fails or times out."""


class ControlPlanePort(Protocol):
    """Port exposing account mutations and traffic counters of the proxy."""

    def add_account(self, account: ProxyAccount) -> None:
        """Install an account on its inbound.

        Raises:
            ControlPlaneError: If the proxy rejects the call.
        """

    def remove_account(self, email: str, inbound_tag: str) -> None:
        """Evict an account from an inbound.

        Raises:
            ControlPlaneError: If the proxy rejects the call.
        """

    def query_counter(self, name: str, reset: bool) -> int | None:
        """Read a named counter, zeroing it server-side when reset is set.

        Returns:
            int | None: Counter value, or None when the proxy has no data.

        Raises:
            ControlPlaneError: If the proxy rejects the call.
        """


__all__ = ["ControlPlaneError", "ControlPlanePort"]
