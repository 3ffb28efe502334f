"""Tests for source row mapping."""

import pytest

from src.domain.models.accounts import ProxyAccount
from src.domain.services.credentials import account_from_row, derive_password


def test_account_from_row_uses_port_as_identity() -> None:
    """Rows should map to lowest-level accounts keyed by port."""
    account = account_from_row(10086, "s3cret", "ssapi")

    assert account == ProxyAccount(
        email="10086",
        inbound_tag="ssapi",
        password="10086s3cret",
        level=0,
    )


def test_account_from_row_is_deterministic() -> None:
    """Re-reading the same row must yield an equal record."""
    assert account_from_row(2000, "pw", "ssapi") == account_from_row(
        2000,
        "pw",
        "ssapi",
    )


def test_derive_password_changes_with_secret() -> None:
    """A new secret must produce a new credential."""
    assert derive_password(2000, "old") != derive_password(2000, "new")


def test_derive_password_rejects_missing_secret() -> None:
    """A NULL secret must not be installed as the text "None"."""
    with pytest.raises(ValueError):
        derive_password(8388, None)


def test_account_from_row_rejects_missing_port() -> None:
    """A row without a port has no identity."""
    with pytest.raises(TypeError):
        account_from_row(None, "pw", "ssapi")
