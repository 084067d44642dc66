"""Querier configuration.

Configuration is an immutable value handed to a querier at construction.
:func:`load_config_from_env` builds one from environment variables for
deployments that configure through the environment.
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from sqlrecord.dialects import DialectName, get_dialect
from sqlrecord.exceptions import ImproperConfigurationError
from sqlrecord.utils.logging import get_logger

__all__ = ("QuerierConfig", "load_config_from_env", "validate_config")

logger = get_logger("config")


@dataclass(frozen=True)
class QuerierConfig:
    """Settings shared by every statement a querier issues."""

    default_dialect: str = DialectName.SQLITE3.value
    """Dialect used by :meth:`Querier.from_config`."""
    log_queries: bool = True
    """Log every statement at DEBUG level with its duration."""
    log_arguments: bool = False
    """Include statement arguments in statement log entries."""
    slow_query_threshold_ms: Optional[float] = None
    """Log statements slower than this at WARNING level; None disables it."""

    def replace(self, **changes: Any) -> "QuerierConfig":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)


def validate_config(config: QuerierConfig) -> "list[str]":
    """Return a list of problems found in ``config``; empty when valid."""
    problems: list[str] = []
    try:
        get_dialect(config.default_dialect)
    except ImproperConfigurationError as e:
        problems.append(str(e))
    if config.slow_query_threshold_ms is not None and config.slow_query_threshold_ms < 0:
        problems.append(f"slow_query_threshold_ms must not be negative, got {config.slow_query_threshold_ms}")
    return problems


def load_config_from_env() -> QuerierConfig:
    """Load configuration from environment variables.

    Environment Variables Supported:
    - SQLRECORD_DIALECT: Default SQL dialect (string)
    - SQLRECORD_LOG_QUERIES: Log statements (true/false)
    - SQLRECORD_LOG_ARGUMENTS: Log statement arguments (true/false)
    - SQLRECORD_SLOW_QUERY_MS: Slow statement threshold in milliseconds (float)

    Raises:
        ImproperConfigurationError: if the loaded configuration is invalid.

    Returns:
        QuerierConfig loaded from environment variables
    """
    defaults = QuerierConfig()
    config = QuerierConfig(
        default_dialect=os.getenv("SQLRECORD_DIALECT", defaults.default_dialect),
        log_queries=_env_bool("SQLRECORD_LOG_QUERIES", defaults.log_queries),
        log_arguments=_env_bool("SQLRECORD_LOG_ARGUMENTS", defaults.log_arguments),
        slow_query_threshold_ms=_env_float("SQLRECORD_SLOW_QUERY_MS", defaults.slow_query_threshold_ms),
    )
    problems = validate_config(config)
    if problems:
        raise ImproperConfigurationError("; ".join(problems))
    return config


def _env_bool(key: str, default: bool) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on", "enabled")


def _env_float(key: str, default: Optional[float]) -> Optional[float]:
    """Get float value from environment variable."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Invalid float value for %s: %s, using default %s", key, value, default)
        return default
