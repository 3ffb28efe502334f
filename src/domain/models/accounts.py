"""Domain models for proxy accounts and their traffic."""

from dataclasses import dataclass

from src.domain.constants import DEFAULT_ACCESS_LEVEL


@dataclass(frozen=True)
class ProxyAccount:
    """Account as installed on a proxy inbound.

    Attributes:
        email: Stable identity of the account (the user's port as text).
        inbound_tag: Tag of the inbound the account is attached to.
        password: Credential installed for the account.
        level: Access tier of the account.
    """

    email: str
    inbound_tag: str
    password: str
    level: int = DEFAULT_ACCESS_LEVEL


@dataclass(frozen=True)
class TrafficSample:
    """Bytes drained from the proxy counters for one account and interval."""

    download: int = 0
    upload: int = 0


__all__ = ["ProxyAccount", "TrafficSample"]
