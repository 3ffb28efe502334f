"""Application use cases package."""

from .reconcile_accounts import (
    AccountFailure,
    ReconcileAccountsResult,
    ReconcileAccountsUseCase,
)
from .reconcile_loop import ReconcileLoop
from .settle_traffic import SettleTrafficUseCase, TrafficSettlement

__all__ = [
    "AccountFailure",
    "ReconcileAccountsResult",
    "ReconcileAccountsUseCase",
    "ReconcileLoop",
    "SettleTrafficUseCase",
    "TrafficSettlement",
]
