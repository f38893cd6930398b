"""Pydantic settings loaded from YAML configuration."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, SecretStr

_settings: Settings | None = None

_DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class StorageConfig(BaseModel):
    """Where the dismissed/read id sets are persisted."""

    backend: Literal["json_file", "memory"] = "json_file"
    directory: str = ".spendalerts"
    dismissed_key: str = "dismissed-alert-ids"
    read_key: str = "read-alert-ids"


class CurrencyConfig(BaseModel):
    """Currency rendering used by the default formatter."""

    symbol: str = "$"
    decimals: int = 2


class ProviderConfig(BaseModel):
    """Where snapshots come from: a local JSON document or an HTTP backend."""

    kind: Literal["json_file", "http"] = "json_file"
    snapshot_path: str = "data/snapshot.json"
    base_url: str = "http://localhost:8000/api"
    api_key: SecretStr = SecretStr("")
    timeout_secs: float = 10.0


class AlertThresholds(BaseModel):
    """Detector thresholds. Percentages are whole numbers (80 == 80%)."""

    budget_default_alert_threshold: Decimal = Decimal(80)

    goal_halfway_pct: int = 50
    goal_almost_pct: int = 75
    goal_deadline_window_days: int = 30
    goal_deadline_min_pct: int = 80

    subscription_renewal_window_days: int = 7
    subscription_unused_days: int = 30

    bill_upcoming_window_days: int = 7

    # Renewals and bills this close are raised to WARNING.
    urgent_days: int = 1

    debt_high_interest_rate: Decimal = Decimal(15)

    spending_lookback_days: int = 30
    spending_week_days: int = 7
    large_transaction_multiplier: Decimal = Decimal(3)
    large_transaction_floor: Decimal = Decimal(100)
    large_transaction_max_alerts: int = 3
    unusual_week_pct: int = 120


class Settings(BaseModel):
    """Root settings container."""

    logging: LoggingConfig = LoggingConfig()
    storage: StorageConfig = StorageConfig()
    currency: CurrencyConfig = CurrencyConfig()
    provider: ProviderConfig = ProviderConfig()
    thresholds: AlertThresholds = AlertThresholds()
    messages_path: str | None = None


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file and cache globally.

    Args:
        path: Path to YAML config. Defaults to config/settings.yaml.

    Returns:
        Parsed Settings instance.
    """
    global _settings  # noqa: PLW0603

    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if isinstance(raw, dict):
                data = raw

    _settings = Settings(**data)
    return _settings


def get_settings() -> Settings:
    """Return the cached settings, loading defaults if not yet loaded."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings  # noqa: PLW0603
    _settings = None
