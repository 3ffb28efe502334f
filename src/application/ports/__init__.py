"""Application ports package."""

from .accounts_source import (
    AccountsSourceError,
    AccountsSourcePort,
    TrafficLedgerError,
    TrafficLedgerPort,
)
from .control_plane import ControlPlaneError, ControlPlanePort
from .database import DatabaseEnginePort
from .snapshot_store import SnapshotStoreError, SnapshotStorePort

__all__ = [
    "AccountsSourceError",
    "AccountsSourcePort",
    "TrafficLedgerError",
    "TrafficLedgerPort",
    "ControlPlaneError",
    "ControlPlanePort",
    "DatabaseEnginePort",
    "SnapshotStoreError",
    "SnapshotStorePort",
]
