"""Mapping of source-of-truth rows into proxy accounts."""

from src.domain.constants import DEFAULT_ACCESS_LEVEL
from src.domain.models.accounts import ProxyAccount


def derive_password(port: int, secret: str) -> str:
    """Build the proxy credential for a user.

    The credential is the port followed by the stored secret, so reading the
    same row twice always yields the same password.

    Args:
        port: User port from the source row.
        secret: Stored secret from the source row.

    Returns:
        str: Credential to install on the proxy.

    Raises:
        ValueError: If the secret is missing.
    """
    if secret is None:
        raise ValueError(f"User on port {port} has no secret")
    return f"{int(port)}{secret}"


def account_from_row(port: int, secret: str, inbound_tag: str) -> ProxyAccount:
    """Map a raw (port, secret) row into a canonical proxy account.

    Args:
        port: User port, used as the account identity.
        secret: Stored secret for the user.
        inbound_tag: Inbound every account of the deployment is attached to.

    Returns:
        ProxyAccount: Account record with the lowest access level.

    Raises:
        TypeError: If the port is missing.
        ValueError: If the port is not numeric or the secret is missing.
    """
    return ProxyAccount(
        email=str(int(port)),
        inbound_tag=inbound_tag,
        password=derive_password(port, secret),
        level=DEFAULT_ACCESS_LEVEL,
    )


__all__ = ["derive_password", "account_from_row"]
