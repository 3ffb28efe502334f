"""Domain models describing a reconciliation pass."""

from dataclasses import dataclass

from src.domain.models.accounts import ProxyAccount


@dataclass(frozen=True)
class AccountUpdate:
    """Pair of applied and desired records for the same identity."""

    applied: ProxyAccount
    desired: ProxyAccount

    @property
    def email(self) -> str:
        return self.desired.email


@dataclass(frozen=True)
class ReconciliationPlan:
    """Mutations needed to move the applied set to the desired set.

    Attributes:
        to_add: Desired accounts with no applied counterpart.
        to_update: Accounts whose applied record differs from the desired one.
        to_remove: Applied accounts no longer desired.
    """

    to_add: tuple[ProxyAccount, ...] = ()
    to_update: tuple[AccountUpdate, ...] = ()
    to_remove: tuple[ProxyAccount, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.to_add or self.to_update or self.to_remove)


__all__ = ["AccountUpdate", "ReconciliationPlan"]
