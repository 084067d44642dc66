"""Tests for sqlrecord.config module."""

import logging

import pytest

from sqlrecord.config import QuerierConfig, load_config_from_env, validate_config
from sqlrecord.exceptions import ImproperConfigurationError

ENV_KEYS = ("SQLRECORD_DIALECT", "SQLRECORD_LOG_QUERIES", "SQLRECORD_LOG_ARGUMENTS", "SQLRECORD_SLOW_QUERY_MS")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_config_defaults() -> None:
    config = QuerierConfig()
    assert config.default_dialect == "sqlite3"
    assert config.log_queries is True
    assert config.log_arguments is False
    assert config.slow_query_threshold_ms is None


def test_config_is_frozen() -> None:
    config = QuerierConfig()
    with pytest.raises(AttributeError):
        config.log_queries = False  # type: ignore[misc]


def test_config_replace() -> None:
    config = QuerierConfig()
    changed = config.replace(log_arguments=True)
    assert changed.log_arguments is True
    assert config.log_arguments is False
    assert changed != config


def test_validate_config() -> None:
    assert validate_config(QuerierConfig()) == []

    problems = validate_config(QuerierConfig(default_dialect="oracle", slow_query_threshold_ms=-1))
    assert len(problems) == 2
    assert "Unknown dialect 'oracle'" in problems[0]
    assert "must not be negative" in problems[1]


def test_load_config_from_env_defaults() -> None:
    assert load_config_from_env() == QuerierConfig()


def test_load_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SQLRECORD_DIALECT", "postgresql")
    monkeypatch.setenv("SQLRECORD_LOG_QUERIES", "false")
    monkeypatch.setenv("SQLRECORD_LOG_ARGUMENTS", "yes")
    monkeypatch.setenv("SQLRECORD_SLOW_QUERY_MS", "250")

    config = load_config_from_env()

    assert config == QuerierConfig(
        default_dialect="postgresql", log_queries=False, log_arguments=True, slow_query_threshold_ms=250.0
    )


def test_load_config_from_env_invalid_dialect(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SQLRECORD_DIALECT", "oracle")

    with pytest.raises(ImproperConfigurationError, match="Unknown dialect"):
        load_config_from_env()


def test_load_config_from_env_invalid_float(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("SQLRECORD_SLOW_QUERY_MS", "fast")

    with caplog.at_level(logging.WARNING, logger="sqlrecord"):
        config = load_config_from_env()

    assert config.slow_query_threshold_ms is None
    assert "Invalid float value for SQLRECORD_SLOW_QUERY_MS" in caplog.text
