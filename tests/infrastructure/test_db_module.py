"""Tests for the infrastructure.db module."""

import pytest

from src.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should return the requested value."""
    monkeypatch.setenv("PROXY_DB_URL", "mysql+pymysql://example")

    assert db_module._get_env_var("PROXY_DB_URL") == "mysql+pymysql://example"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.delenv("PROXY_DB_URL", raising=False)

    with pytest.raises(RuntimeError):
        db_module._get_env_var("PROXY_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("mysql+pymysql://accounts")

    assert engine == "engine"
    assert captured["db_url"] == "mysql+pymysql://accounts"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["pool_recycle"] == 3600


def test_get_accounts_engine_caches_engine(monkeypatch):
    """get_accounts_engine should memoize the created engine."""
    db_module._accounts_engine = None
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setenv("PROXY_DB_URL", "mysql+pymysql://accounts")

    engine_one = db_module.get_accounts_engine()
    engine_two = db_module.get_accounts_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:mysql+pymysql://accounts"
    assert created == ["mysql+pymysql://accounts"]
    db_module._accounts_engine = None


def test_adapter_returns_underlying_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the global helper."""
    monkeypatch.setattr(
        db_module,
        "get_accounts_engine",
        lambda: "accounts_engine",
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_accounts_engine() == "accounts_engine"
