"""Diff planning between desired and applied account sets."""

from collections.abc import Iterable

from src.domain.models.accounts import ProxyAccount
from src.domain.models.reconciliation import AccountUpdate, ReconciliationPlan


def index_accounts(accounts: Iterable[ProxyAccount]) -> dict[str, ProxyAccount]:
    """Index accounts by identity; later records win on duplicates."""
    return {account.email: account for account in accounts}


def plan_reconciliation(
    desired: Iterable[ProxyAccount],
    applied: Iterable[ProxyAccount],
) -> ReconciliationPlan:
    """Compute the mutations converging the applied set to the desired set.

    An identity whose applied record differs from the desired one in any
    attribute is planned as an update, which the proxy can only carry out as
    a remove followed by an add.

    Args:
        desired: Accounts enabled in the source of truth.
        applied: Accounts the proxy is believed to hold.

    Returns:
        ReconciliationPlan: Additions, updates and removals sorted by identity.
    """
    desired_by_email = index_accounts(desired)
    applied_by_email = index_accounts(applied)

    to_add = []
    to_update = []
    for email in sorted(desired_by_email):
        account = desired_by_email[email]
        current = applied_by_email.get(email)
        if current is None:
            to_add.append(account)
        elif current != account:
            to_update.append(AccountUpdate(applied=current, desired=account))

    to_remove = [
        applied_by_email[email]
        for email in sorted(applied_by_email)
        if email not in desired_by_email
    ]

    return ReconciliationPlan(
        to_add=tuple(to_add),
        to_update=tuple(to_update),
        to_remove=tuple(to_remove),
    )


__all__ = ["index_accounts", "plan_reconciliation"]
