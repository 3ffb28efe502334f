"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path

from src.domain.constants import DEFAULT_INBOUND_TAG, NOISE_FLOOR_BYTES


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ProxySyncSettings:
    """Settings for the synchronization daemon.

    Attributes:
        api_address: Host of the Xray API listener.
        api_port: Port of the Xray API listener.
        inbound_tag: Inbound the shadowsocks accounts are attached to.
        cipher: Shadowsocks cipher installed with every account.
        rpc_timeout_seconds: Deadline applied to each Xray API call.
        interval_seconds: Seconds between reconciliation cycles.
        snapshot_path: File holding the applied-state snapshot.
        noise_floor: Traffic samples at or below this are not written.
        reset_snapshot_on_start: Whether startup forces a full resync.
    """

    api_address: str = "127.0.0.1"
    api_port: int = 9085
    inbound_tag: str = DEFAULT_INBOUND_TAG
    cipher: str = "aes-128-gcm"
    rpc_timeout_seconds: float = 10.0
    interval_seconds: float = 60.0
    snapshot_path: Path = Path("current_users.json")
    noise_floor: int = NOISE_FLOOR_BYTES
    reset_snapshot_on_start: bool = True

    @property
    def api_target(self) -> str:
        return f"{self.api_address}:{self.api_port}"

    @classmethod
    def from_env(cls) -> "ProxySyncSettings":
        """Build settings from environment variables.

        Returns:
            ProxySyncSettings: Settings sourced from environment variables.

        Raises:
            ValueError: If a numeric or boolean variable cannot be parsed.
        """
        defaults = cls()
        return cls(
            api_address=os.getenv("XRAY_API_ADDRESS", defaults.api_address),
            api_port=cls._int_env("XRAY_API_PORT", defaults.api_port),
            inbound_tag=os.getenv("XRAY_INBOUND_TAG", defaults.inbound_tag),
            cipher=os.getenv("XRAY_SS_CIPHER", defaults.cipher).strip().lower(),
            rpc_timeout_seconds=cls._float_env(
                "XRAY_RPC_TIMEOUT_SECONDS",
                defaults.rpc_timeout_seconds,
            ),
            interval_seconds=cls._float_env(
                "SYNC_INTERVAL_SECONDS",
                defaults.interval_seconds,
            ),
            snapshot_path=Path(
                os.getenv("SNAPSHOT_PATH", str(defaults.snapshot_path))
            ).expanduser(),
            noise_floor=cls._int_env("TRAFFIC_NOISE_FLOOR", defaults.noise_floor),
            reset_snapshot_on_start=cls._bool_env(
                "RESET_SNAPSHOT_ON_START",
                defaults.reset_snapshot_on_start,
            ),
        )

    @staticmethod
    def _int_env(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from exc

    @staticmethod
    def _float_env(name: str, default: float) -> float:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{name} must be a number, got {raw!r}") from exc

    @staticmethod
    def _bool_env(name: str, default: bool) -> bool:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ValueError(f"{name} must be a boolean, got {raw!r}")


__all__ = ["ProxySyncSettings"]
