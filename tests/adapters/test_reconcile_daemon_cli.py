"""Tests for the reconcile_daemon_cli adapter."""

from unittest.mock import MagicMock

from src.adapters import reconcile_daemon_cli
from src.infrastructure.settings import ProxySyncSettings


def _patch(monkeypatch, loop):
    fake_logger = MagicMock()
    db_adapter = MagicMock()
    control_plane = MagicMock()
    settings = ProxySyncSettings()

    monkeypatch.setattr(reconcile_daemon_cli.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(reconcile_daemon_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        reconcile_daemon_cli.ProxySyncSettings,
        "from_env",
        classmethod(lambda cls: settings),
    )
    monkeypatch.setattr(
        reconcile_daemon_cli,
        "build_database_adapter",
        lambda: db_adapter,
    )
    monkeypatch.setattr(
        reconcile_daemon_cli,
        "build_control_plane",
        lambda _settings: control_plane,
    )

    def _fake_build_loop(_settings, _control_plane, db_port, logger):
        assert _settings is settings
        assert _control_plane is control_plane
        assert db_port is db_adapter
        assert logger is fake_logger
        return loop

    monkeypatch.setattr(
        reconcile_daemon_cli,
        "build_reconcile_loop",
        _fake_build_loop,
    )
    return db_adapter, control_plane, fake_logger


def test_main_checks_connections_and_runs_loop(monkeypatch):
    """The daemon verifies both connections before looping."""
    loop = MagicMock()
    db_adapter, control_plane, _ = _patch(monkeypatch, loop)

    reconcile_daemon_cli.main()

    conn = db_adapter.get_accounts_engine.return_value.connect.return_value
    conn.__enter__.return_value.exec_driver_sql.assert_called_once_with(
        "SELECT 1"
    )
    control_plane.wait_until_ready.assert_called_once_with(10.0)
    loop.run.assert_called_once_with()
    control_plane.close.assert_called_once()


def test_main_closes_channel_on_interrupt(monkeypatch):
    """Ctrl-C stops the loop cleanly."""
    loop = MagicMock()
    loop.run.side_effect = KeyboardInterrupt
    _, control_plane, fake_logger = _patch(monkeypatch, loop)

    reconcile_daemon_cli.main()

    control_plane.close.assert_called_once()
    fake_logger.info.assert_called()


def test_main_loads_env_file_before_reading_settings(monkeypatch):
    """Values from .env are visible to every configuration reader."""
    events = []
    _patch(monkeypatch, MagicMock())
    settings = ProxySyncSettings()
    monkeypatch.setattr(
        reconcile_daemon_cli.dotenv,
        "load_dotenv",
        lambda: events.append("dotenv"),
    )
    monkeypatch.setattr(
        reconcile_daemon_cli.ProxySyncSettings,
        "from_env",
        classmethod(lambda cls: events.append("settings") or settings),
    )
    monkeypatch.setattr(
        reconcile_daemon_cli,
        "build_reconcile_loop",
        lambda *args, **kwargs: MagicMock(),
    )

    reconcile_daemon_cli.main()

    assert events == ["dotenv", "settings"]
