"""Domain services package."""

from .credentials import account_from_row, derive_password
from .planning import index_accounts, plan_reconciliation

__all__ = [
    "account_from_row",
    "derive_password",
    "index_accounts",
    "plan_reconciliation",
]
