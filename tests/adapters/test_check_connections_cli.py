"""Tests for the check_connections adapter."""

from unittest.mock import MagicMock

from src.adapters import check_connections
from src.infrastructure.settings import ProxySyncSettings


def test_main_checks_database_and_xray(monkeypatch):
    """Both services are queried and the channel is closed."""
    fake_logger = MagicMock()
    adapter = MagicMock()
    control_plane = MagicMock()
    control_plane.ping.return_value = 4

    load_dotenv = MagicMock()
    monkeypatch.setattr(check_connections.dotenv, "load_dotenv", load_dotenv)
    monkeypatch.setattr(check_connections, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        check_connections.ProxySyncSettings,
        "from_env",
        classmethod(lambda cls: ProxySyncSettings()),
    )
    monkeypatch.setattr(
        check_connections,
        "build_database_adapter",
        lambda: adapter,
    )
    monkeypatch.setattr(
        check_connections,
        "build_control_plane",
        lambda settings: control_plane,
    )

    check_connections.main()

    conn = adapter.get_accounts_engine.return_value.connect.return_value
    conn.__enter__.return_value.exec_driver_sql.assert_called_once_with(
        "SELECT 1"
    )
    load_dotenv.assert_called_once_with()
    control_plane.ping.assert_called_once_with()
    control_plane.close.assert_called_once()
    messages = [call.args[0] for call in fake_logger.info.call_args_list]
    assert any("4 counters" in message for message in messages)
