"""Fixed-interval control loop around the reconciliation use case."""

import time
from typing import Callable

from src.application.ports.accounts_source import AccountsSourceError
from src.application.ports.snapshot_store import (
    SnapshotStoreError,
    SnapshotStorePort,
)
from src.application.use_cases.reconcile_accounts import (
    ReconcileAccountsResult,
    ReconcileAccountsUseCase,
)
from src.infrastructure.logging.logger import get_app_logger


class ReconcileLoop:
    """Run one reconciliation cycle per tick, never overlapping cycles.

    The first cycle starts immediately. Later cycles start on multiples of
    the interval measured from the loop start; ticks missed by a slow cycle
    are skipped.
    """

    def __init__(
        self,
        reconcile: ReconcileAccountsUseCase,
        snapshot_store: SnapshotStorePort,
        interval_seconds: float,
        reset_on_start: bool = True,
        logger=None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the loop.

        Args:
            reconcile: Use case executed on every tick.
            snapshot_store: Store wiped once at startup when reset_on_start.
            interval_seconds: Seconds between cycle starts.
            reset_on_start: Whether to force a full resynchronization first.
            logger: Optional logger compatible with logging.Logger-like API.
            sleep: Function used to wait for the next tick.
            clock: Monotonic clock used to schedule ticks.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._reconcile = reconcile
        self._snapshot_store = snapshot_store
        self._interval = interval_seconds
        self._reset_on_start = reset_on_start
        self._logger = logger or get_app_logger()
        self._sleep = sleep
        self._clock = clock
        self._stopped = False

    def stop(self) -> None:
        """Ask the loop to exit once the current cycle completes."""
        self._stopped = True

    def run(self, max_cycles: int | None = None) -> int:
        """Run cycles until stopped or until max_cycles have completed.

        Args:
            max_cycles: Optional number of cycles after which to return.

        Returns:
            int: Number of cycles executed.

        Raises:
            SnapshotStoreError: If the startup wipe of the snapshot fails.
        """
        if self._reset_on_start:
            self._snapshot_store.clear()
            self._logger.info("Cleared applied-state snapshot before start")

        started_at = self._clock()
        cycles = 0
        while not self._stopped:
            self.run_cycle()
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            if self._stopped:
                break
            self._sleep(self._seconds_until_next_tick(started_at))
        return cycles

    def run_cycle(self) -> ReconcileAccountsResult | None:
        """Run a single cycle, logging cycle-level failures.

        Returns:
            ReconcileAccountsResult | None: Cycle report, or None when the
            cycle was aborted.
        """
        try:
            result = self._reconcile.run()
        except AccountsSourceError as exc:
            self._logger.error(f"Failed to fetch users from database: {exc}")
            return None
        except SnapshotStoreError as exc:
            self._logger.error(f"Failed to access applied-state snapshot: {exc}")
            return None
        except Exception as exc:
            self._logger.exception(f"User synchronization cycle failed: {exc}")
            return None

        if result.failed or result.traffic_failures:
            self._logger.warning(
                "User synchronization finished with failures: "
                f"added={len(result.added)}, updated={len(result.updated)}, "
                f"removed={len(result.removed)}, failed={len(result.failed)}, "
                f"traffic_settled={len(result.traffic_settled)}, "
                f"traffic_failures={len(result.traffic_failures)}"
            )
        else:
            self._logger.info(
                "User synchronization succeeded: "
                f"added={len(result.added)}, updated={len(result.updated)}, "
                f"removed={len(result.removed)}, "
                f"traffic_settled={len(result.traffic_settled)}, "
                f"applied={result.applied_count}"
            )
        return result

    def _seconds_until_next_tick(self, started_at: float) -> float:
        now = self._clock()
        ticks_done = int((now - started_at) // self._interval) + 1
        return max(0.0, started_at + ticks_done * self._interval - now)


__all__ = ["ReconcileLoop"]
