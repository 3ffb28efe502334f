"""Port for the persisted applied-state snapshot."""

from typing import Protocol

from src.domain.models.accounts import ProxyAccount


class SnapshotStoreError(RuntimeError):
    """Raised when the snapshot cannot be read, written or removed."""


class SnapshotStorePort(Protocol):
    """Port exposing the set of accounts last applied to the proxy."""

    def load(self) -> set[ProxyAccount]:
        """Return the applied accounts, or an empty set when none are stored."""

    def save(self, accounts: set[ProxyAccount]) -> None:
        """Replace the stored applied accounts with the given set."""

    def clear(self) -> None:
        """Forget every stored account, forcing a full resynchronization."""


__all__ = ["SnapshotStoreError", "SnapshotStorePort"]
