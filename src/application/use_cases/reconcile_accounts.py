"""Use case for converging proxy accounts to the source-of-truth table.

One run of the use case is one reconciliation cycle:

* reads the desired accounts from the source of truth and the applied
  accounts from the snapshot store;
* adds, re-creates and removes proxy accounts until the proxy matches the
  desired set, isolating failures per account;
* settles the traffic of every desired account;
* saves the accounts that are actually applied as the new snapshot.
"""

from dataclasses import dataclass

from src.application.ports.accounts_source import AccountsSourcePort
from src.application.ports.control_plane import (
    ControlPlaneError,
    ControlPlanePort,
)
from src.application.ports.snapshot_store import SnapshotStorePort
from src.application.use_cases.settle_traffic import SettleTrafficUseCase
from src.domain.models.accounts import ProxyAccount
from src.domain.models.reconciliation import AccountUpdate
from src.domain.services.planning import index_accounts, plan_reconciliation
from src.infrastructure.logging.logger import get_app_logger


ADD = "add"
REMOVE = "remove"
UPDATE_REMOVE = "update_remove"
UPDATE_ADD = "update_add"


@dataclass(frozen=True)
class AccountFailure:
    """Failed operation for one account during a cycle."""

    email: str
    operation: str
    error: str


@dataclass(frozen=True)
class ReconcileAccountsResult:
    """Report of one reconciliation cycle.

    Attributes:
        added: Identities installed on the proxy.
        updated: Identities re-created with a new record.
        removed: Identities evicted from the proxy.
        failed: Account mutations that failed and will be retried.
        traffic_settled: Identities whose traffic was written.
        traffic_failures: Counter reads or writes that failed.
        desired_count: Number of accounts in the desired set.
        applied_count: Number of accounts in the saved snapshot.
    """

    added: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    failed: tuple[AccountFailure, ...] = ()
    traffic_settled: tuple[str, ...] = ()
    traffic_failures: tuple[AccountFailure, ...] = ()
    desired_count: int = 0
    applied_count: int = 0

    @property
    def mutation_count(self) -> int:
        return len(self.added) + len(self.updated) + len(self.removed)


class ReconcileAccountsUseCase:
    """Converge the proxy accounts to the enabled accounts of the database.

    The snapshot store is the only memory of what was told to the proxy;
    every successful mutation is reflected in it and every failed one is
    left out, so the next cycle retries exactly the failed work.
    """

    def __init__(
        self,
        accounts_source: AccountsSourcePort,
        snapshot_store: SnapshotStorePort,
        control_plane: ControlPlanePort,
        traffic_settlement: SettleTrafficUseCase,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts_source: Port reading the desired accounts.
            snapshot_store: Port holding the applied accounts.
            control_plane: Port mutating proxy accounts.
            traffic_settlement: Use case draining per-account traffic.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts_source = accounts_source
        self._snapshot_store = snapshot_store
        self._control_plane = control_plane
        self._traffic_settlement = traffic_settlement
        self._logger = logger or get_app_logger()

    def run(self) -> ReconcileAccountsResult:
        """Execute one reconciliation cycle.

        Returns:
            ReconcileAccountsResult: Summary of the cycle.

        Raises:
            AccountsSourceError: If the desired accounts cannot be read; the
                proxy and the snapshot are left untouched.
            SnapshotStoreError: If the snapshot cannot be loaded (nothing is
                touched) or saved (after the proxy was mutated).
        """
        desired_accounts = self._accounts_source.fetch_enabled_accounts()
        applied_accounts = self._snapshot_store.load()

        desired = index_accounts(desired_accounts)
        if len(desired) != len(desired_accounts):
            self._logger.warning(
                f"Ignored {len(desired_accounts) - len(desired)} duplicate "
                "accounts in the source of truth"
            )
        working = index_accounts(applied_accounts)
        plan = plan_reconciliation(desired.values(), working.values())

        added: list[str] = []
        updated: list[str] = []
        removed: list[str] = []
        failed: list[AccountFailure] = []

        for account in plan.to_add:
            if self._add(account, failed):
                working[account.email] = account
                added.append(account.email)

        for update in plan.to_update:
            self._update(update, working, updated, failed)

        for account in plan.to_remove:
            if self._remove(account, failed):
                working.pop(account.email, None)
                removed.append(account.email)

        traffic_settled, traffic_failures = self._settle_traffic(
            desired.values()
        )

        self._snapshot_store.save(set(working.values()))

        return ReconcileAccountsResult(
            added=tuple(added),
            updated=tuple(updated),
            removed=tuple(removed),
            failed=tuple(failed),
            traffic_settled=traffic_settled,
            traffic_failures=traffic_failures,
            desired_count=len(desired),
            applied_count=len(working),
        )

    def _add(
        self,
        account: ProxyAccount,
        failed: list[AccountFailure],
    ) -> bool:
        self._logger.info(f"Adding user: {account.email}")
        try:
            self._control_plane.add_account(account)
        except ControlPlaneError as exc:
            self._logger.error(
                f"Failed to add user: {account.email}, error: {exc}"
            )
            failed.append(AccountFailure(account.email, ADD, str(exc)))
            return False
        return True

    def _update(
        self,
        update: AccountUpdate,
        working: dict[str, ProxyAccount],
        updated: list[str],
        failed: list[AccountFailure],
    ) -> None:
        """Re-create an account whose record changed.

        The proxy has no in-place update, so the applied record is removed
        before the desired one is added. The add is never attempted on top of
        a failed remove.
        """
        email = update.email
        self._logger.info(f"Updating user: {email}")
        try:
            self._control_plane.remove_account(
                email,
                update.applied.inbound_tag,
            )
        except ControlPlaneError as exc:
            self._logger.error(
                f"Failed to remove user for update: {email}, error: {exc}"
            )
            failed.append(AccountFailure(email, UPDATE_REMOVE, str(exc)))
            return

        try:
            self._control_plane.add_account(update.desired)
        except ControlPlaneError as exc:
            self._logger.error(
                f"Failed to add user after update: {email}, error: {exc}"
            )
            failed.append(AccountFailure(email, UPDATE_ADD, str(exc)))
            working.pop(email, None)
            return

        working[email] = update.desired
        updated.append(email)

    def _remove(
        self,
        account: ProxyAccount,
        failed: list[AccountFailure],
    ) -> bool:
        self._logger.info(f"Removing user: {account.email}")
        try:
            self._control_plane.remove_account(
                account.email,
                account.inbound_tag,
            )
        except ControlPlaneError as exc:
            self._logger.error(
                f"Failed to remove user: {account.email}, error: {exc}"
            )
            failed.append(AccountFailure(account.email, REMOVE, str(exc)))
            return False
        return True

    def _settle_traffic(
        self,
        accounts,
    ) -> tuple[tuple[str, ...], tuple[AccountFailure, ...]]:
        """Settle traffic for every desired account, whatever its mutations did."""
        settled = []
        failures = []
        for account in sorted(accounts, key=lambda row: row.email):
            settlement = self._traffic_settlement.settle(account)
            if settlement.written:
                settled.append(settlement.email)
            failures.extend(
                AccountFailure(settlement.email, operation, error)
                for operation, error in settlement.errors
            )
        return tuple(settled), tuple(failures)


__all__ = [
    "AccountFailure",
    "ReconcileAccountsResult",
    "ReconcileAccountsUseCase",
    "ADD",
    "REMOVE",
    "UPDATE_REMOVE",
    "UPDATE_ADD",
]
