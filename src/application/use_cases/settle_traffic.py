"""Use case for draining proxy traffic counters into the accounts table."""

from dataclasses import dataclass

from src.application.ports.accounts_source import (
    TrafficLedgerError,
    TrafficLedgerPort,
)
from src.application.ports.control_plane import (
    ControlPlaneError,
    ControlPlanePort,
)
from src.domain.constants import (
    DOWNLINK_COUNTER_TEMPLATE,
    NOISE_FLOOR_BYTES,
    UPLINK_COUNTER_TEMPLATE,
)
from src.domain.models.accounts import ProxyAccount, TrafficSample
from src.domain.policies.traffic import exceeds_noise_floor
from src.infrastructure.logging.logger import get_app_logger


QUERY_UPLINK = "query_uplink"
QUERY_DOWNLINK = "query_downlink"
WRITE_TRAFFIC = "write_traffic"


@dataclass(frozen=True)
class TrafficSettlement:
    """Outcome of settling one account's traffic for one interval.

    Attributes:
        email: Identity of the settled account.
        sample: Traffic drained from the proxy, zero where reads failed.
        written: Whether the sample was added to the accounts table.
        errors: Operation name and message for every failed step.
    """

    email: str
    sample: TrafficSample
    written: bool
    errors: tuple[tuple[str, str], ...] = ()


class SettleTrafficUseCase:
    """Drain the uplink and downlink counters of an account.

    Counters are read with reset, so each interval is read exactly once.
    A failed write loses the drained sample because the proxy counter has
    already been zeroed.
    """

    def __init__(
        self,
        control_plane: ControlPlanePort,
        traffic_ledger: TrafficLedgerPort,
        noise_floor: int = NOISE_FLOOR_BYTES,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            control_plane: Port used to read and reset traffic counters.
            traffic_ledger: Port used to add traffic to cumulative counters.
            noise_floor: Samples at or below this many bytes are not written.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._control_plane = control_plane
        self._traffic_ledger = traffic_ledger
        self._noise_floor = noise_floor
        self._logger = logger or get_app_logger()

    def settle(self, account: ProxyAccount) -> TrafficSettlement:
        """Drain and record the traffic of one account.

        Args:
            account: Desired account whose counters are drained.

        Returns:
            TrafficSettlement: Drained sample and whether it was written.
        """
        email = account.email
        errors = []

        upload = self._drain_counter(
            UPLINK_COUNTER_TEMPLATE.format(email=email),
            email,
            "uplink",
            QUERY_UPLINK,
            errors,
        )
        download = self._drain_counter(
            DOWNLINK_COUNTER_TEMPLATE.format(email=email),
            email,
            "downlink",
            QUERY_DOWNLINK,
            errors,
        )
        sample = TrafficSample(download=download, upload=upload)

        if not exceeds_noise_floor(sample, self._noise_floor):
            return TrafficSettlement(
                email=email,
                sample=sample,
                written=False,
                errors=tuple(errors),
            )

        try:
            self._traffic_ledger.add_traffic(email, sample)
        except TrafficLedgerError as exc:
            self._logger.error(
                f"Failed to update traffic for user: {email}, "
                f"download={sample.download}, upload={sample.upload}, "
                f"error: {exc}"
            )
            errors.append((WRITE_TRAFFIC, str(exc)))
            return TrafficSettlement(
                email=email,
                sample=sample,
                written=False,
                errors=tuple(errors),
            )

        self._logger.info(
            f"Recorded traffic for user: {email}, "
            f"download={sample.download}, upload={sample.upload}"
        )
        return TrafficSettlement(
            email=email,
            sample=sample,
            written=True,
            errors=tuple(errors),
        )

    def _drain_counter(
        self,
        name: str,
        email: str,
        direction: str,
        operation: str,
        errors: list[tuple[str, str]],
    ) -> int:
        """Read and reset a counter, treating failures and absence as zero."""
        try:
            value = self._control_plane.query_counter(name, reset=True)
        except ControlPlaneError as exc:
            self._logger.error(
                f"Failed to query {direction} traffic "
                f"for user: {email}, error: {exc}"
            )
            errors.append((operation, str(exc)))
            return 0
        if value is None or value < 0:
            return 0
        return value


__all__ = [
    "SettleTrafficUseCase",
    "TrafficSettlement",
    "QUERY_UPLINK",
    "QUERY_DOWNLINK",
    "WRITE_TRAFFIC",
]
