"""SQLAlchemy adapters for the source-of-truth ``user`` table."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.accounts_source import (
    AccountsSourceError,
    AccountsSourcePort,
    TrafficLedgerError,
    TrafficLedgerPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.domain.constants import DEFAULT_INBOUND_TAG
from src.domain.models.accounts import ProxyAccount, TrafficSample
from src.domain.services.credentials import account_from_row


SELECT_ENABLED_USERS_SQL = text(
    """
    SELECT port, passwd
    FROM user
    WHERE enable = 1
    """
)

ADD_TRAFFIC_SQL = text(
    """
    UPDATE user
    SET d = d + :download, u = u + :upload
    WHERE port = :port
    """
)


class SqlAlchemyAccountsSource(AccountsSourcePort):
    """Enabled accounts read from the ``user`` table."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        inbound_tag: str = DEFAULT_INBOUND_TAG,
    ) -> None:
        """Initialize the source adapter.

        Args:
            db_port: Port providing access to the accounts engine.
            inbound_tag: Inbound every account is attached to.
        """
        self._db_port = db_port
        self._inbound_tag = inbound_tag

    def fetch_enabled_accounts(self) -> list[ProxyAccount]:
        """Return the enabled accounts sorted by identity.

        Returns:
            list[ProxyAccount]: Accounts mapped from the enabled rows.

        Raises:
            AccountsSourceError: If the query fails or a row cannot be
                mapped to an account.
        """
        engine = self._db_port.get_accounts_engine()
        try:
            with engine.connect() as conn:
                rows = conn.execute(SELECT_ENABLED_USERS_SQL).all()
        except SQLAlchemyError as exc:
            raise AccountsSourceError(
                f"Failed to read enabled users: {exc}"
            ) from exc
        try:
            accounts = [
                account_from_row(row.port, row.passwd, self._inbound_tag)
                for row in rows
            ]
        except (TypeError, ValueError) as exc:
            raise AccountsSourceError(
                f"Failed to read enabled users: invalid row: {exc}"
            ) from exc
        return sorted(accounts, key=lambda account: int(account.email))


class SqlAlchemyTrafficLedger(TrafficLedgerPort):
    """Cumulative ``d``/``u`` traffic columns of the ``user`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the ledger adapter.

        Args:
            db_port: Port providing access to the accounts engine.
        """
        self._db_port = db_port

    def add_traffic(self, email: str, sample: TrafficSample) -> None:
        """Add a sample to the counters of the user owning the port.

        Args:
            email: Account identity, the user's port as text.
            sample: Traffic to add.

        Raises:
            TrafficLedgerError: If the update fails.
        """
        params = {
            "download": sample.download,
            "upload": sample.upload,
            "port": int(email),
        }
        engine = self._db_port.get_accounts_engine()
        try:
            with engine.begin() as conn:
                conn.execute(ADD_TRAFFIC_SQL, params)
        except SQLAlchemyError as exc:
            raise TrafficLedgerError(
                f"Failed to add traffic for port {email}: {exc}"
            ) from exc


__all__ = [
    "SqlAlchemyAccountsSource",
    "SqlAlchemyTrafficLedger",
    "SELECT_ENABLED_USERS_SQL",
    "ADD_TRAFFIC_SQL",
]
