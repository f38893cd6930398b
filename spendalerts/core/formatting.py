"""Formatting collaborators injected into every detector."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

import structlog
import yaml

from spendalerts.core.config import CurrencyConfig, Settings, get_settings
from spendalerts.core.messages import DEFAULT_MESSAGES

logger = structlog.stdlib.get_logger()

CurrencyFn = Callable[[Decimal], str]
RateFn = Callable[[Decimal], str]
TranslateFn = Callable[..., str]


def format_rate(rate: Decimal) -> str:
    """Render a percentage rate without trailing zeros: 20.00 -> ``20``, 24.90 -> ``24.9``."""
    return f"{Decimal(rate).normalize():f}"


@dataclass(frozen=True)
class Formatters:
    """Pure formatting functions handed to detectors."""

    format_currency: CurrencyFn
    translate: TranslateFn
    format_rate: RateFn = format_rate


class CurrencyFormatter:
    """Render amounts as ``-$1,234.50`` style strings."""

    def __init__(self, config: CurrencyConfig | None = None) -> None:
        self._config = config or CurrencyConfig()
        self._quantum = Decimal(1).scaleb(-self._config.decimals)

    def __call__(self, amount: Decimal | int | float) -> str:
        value = Decimal(str(amount)).quantize(self._quantum, rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""
        return f"{sign}{self._config.symbol}{abs(value):,.{self._config.decimals}f}"


class MessageCatalog:
    """Key → template lookup with ``str.format`` interpolation."""

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self._messages: dict[str, str] = dict(DEFAULT_MESSAGES)
        if messages:
            self._messages.update(messages)

    @classmethod
    def from_yaml(cls, path: str | Path) -> MessageCatalog:
        """Load overrides from a flat ``key: template`` YAML mapping."""
        with open(path) as f:
            raw = yaml.safe_load(f)
        if not isinstance(raw, dict):
            logger.warning("message_catalog_not_a_mapping", path=str(path))
            return cls()
        return cls({str(k): str(v) for k, v in raw.items()})

    def __contains__(self, key: str) -> bool:
        return key in self._messages

    def translate(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        """Resolve *key*; unknown keys come back unchanged."""
        template = self._messages.get(key)
        if template is None:
            return key
        if not params:
            return template
        try:
            return template.format(**params)
        except (KeyError, IndexError, ValueError):
            logger.warning("message_format_failed", key=key, params=sorted(params))
            return template

    __call__ = translate


def default_formatters(settings: Settings | None = None) -> Formatters:
    """Build the currency formatter and message catalog from settings."""
    s = settings or get_settings()
    catalog = MessageCatalog.from_yaml(s.messages_path) if s.messages_path else MessageCatalog()
    return Formatters(
        format_currency=CurrencyFormatter(s.currency),
        translate=catalog.translate,
    )
