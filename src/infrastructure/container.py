"""Composition root for wiring infrastructure adapters."""

from src.application.ports.accounts_source import (
    AccountsSourcePort,
    TrafficLedgerPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.snapshot_store import SnapshotStorePort
from src.application.use_cases.reconcile_accounts import (
    ReconcileAccountsUseCase,
)
from src.application.use_cases.reconcile_loop import ReconcileLoop
from src.application.use_cases.settle_traffic import SettleTrafficUseCase
from src.infrastructure.accounts_repository import (
    SqlAlchemyAccountsSource,
    SqlAlchemyTrafficLedger,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ProxySyncSettings
from src.infrastructure.snapshot_store import JsonSnapshotStore
from src.infrastructure.xray_control_plane import XrayControlPlaneClient


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_accounts_source(
    settings: ProxySyncSettings,
    db_port: DatabaseEnginePort | None = None,
) -> AccountsSourcePort:
    """Return the source-of-truth reader."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountsSource(
        resolved_db,
        inbound_tag=settings.inbound_tag,
    )


def build_traffic_ledger(
    db_port: DatabaseEnginePort | None = None,
) -> TrafficLedgerPort:
    """Return the traffic ledger adapter."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyTrafficLedger(resolved_db)


def build_snapshot_store(settings: ProxySyncSettings) -> SnapshotStorePort:
    """Return the applied-state snapshot store."""
    return JsonSnapshotStore(settings.snapshot_path)


def build_control_plane(settings: ProxySyncSettings) -> XrayControlPlaneClient:
    """Return a control plane client connected to the Xray API."""
    return XrayControlPlaneClient.connect(
        settings.api_target,
        cipher=settings.cipher,
        timeout_seconds=settings.rpc_timeout_seconds,
    )


def build_reconcile_loop(
    settings: ProxySyncSettings,
    control_plane: XrayControlPlaneClient,
    db_port: DatabaseEnginePort | None = None,
    logger=None,
) -> ReconcileLoop:
    """Wire the reconciliation loop from settings and shared connections."""
    resolved_db = db_port or build_database_adapter()
    resolved_logger = logger or get_app_logger()
    snapshot_store = build_snapshot_store(settings)
    settlement = SettleTrafficUseCase(
        control_plane=control_plane,
        traffic_ledger=build_traffic_ledger(resolved_db),
        noise_floor=settings.noise_floor,
        logger=resolved_logger,
    )
    reconcile = ReconcileAccountsUseCase(
        accounts_source=build_accounts_source(settings, resolved_db),
        snapshot_store=snapshot_store,
        control_plane=control_plane,
        traffic_settlement=settlement,
        logger=resolved_logger,
    )
    return ReconcileLoop(
        reconcile=reconcile,
        snapshot_store=snapshot_store,
        interval_seconds=settings.interval_seconds,
        reset_on_start=settings.reset_snapshot_on_start,
        logger=resolved_logger,
    )


__all__ = [
    "build_database_adapter",
    "build_accounts_source",
    "build_traffic_ledger",
    "build_snapshot_store",
    "build_control_plane",
    "build_reconcile_loop",
]
