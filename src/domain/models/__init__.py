"""Domain models package."""

from .accounts import ProxyAccount, TrafficSample
from .reconciliation import AccountUpdate, ReconciliationPlan

__all__ = [
    "ProxyAccount",
    "TrafficSample",
    "AccountUpdate",
    "ReconciliationPlan",
]
