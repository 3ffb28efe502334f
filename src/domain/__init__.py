"""Domain package for business rules and core models."""

from .constants import (
    DEFAULT_ACCESS_LEVEL,
    DEFAULT_INBOUND_TAG,
    DOWNLINK_COUNTER_TEMPLATE,
    NOISE_FLOOR_BYTES,
    UPLINK_COUNTER_TEMPLATE,
)
from .models import (
    AccountUpdate,
    ProxyAccount,
    ReconciliationPlan,
    TrafficSample,
)
from .policies import exceeds_noise_floor
from .services import (
    account_from_row,
    derive_password,
    index_accounts,
    plan_reconciliation,
)

__all__ = [
    "AccountUpdate",
    "ProxyAccount",
    "ReconciliationPlan",
    "TrafficSample",
    "DEFAULT_ACCESS_LEVEL",
    "DEFAULT_INBOUND_TAG",
    "DOWNLINK_COUNTER_TEMPLATE",
    "NOISE_FLOOR_BYTES",
    "UPLINK_COUNTER_TEMPLATE",
    "exceeds_noise_floor",
    "account_from_row",
    "derive_password",
    "index_accounts",
    "plan_reconciliation",
]
