#!/usr/bin/env python3
"""Alert feed CLI — regenerate the feed from a snapshot and act on it.

Usage::

    # Show the ranked feed
    python scripts/alert_feed.py show

    # Snapshot file and evaluation time override
    python scripts/alert_feed.py --snapshot data/snapshot.json --now 2024-03-10T09:00 show

    # Mark one alert read / all alerts read
    python scripts/alert_feed.py read bill_overdue:bill-1
    python scripts/alert_feed.py read-all

    # Dismiss one alert / clear the whole feed
    python scripts/alert_feed.py dismiss budget_warning:b1
    python scripts/alert_feed.py clear

    # JSON output
    python scripts/alert_feed.py --json show
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime

import structlog

from spendalerts.core.config import Settings, load_settings
from spendalerts.core.logging import setup_logging
from spendalerts.core.types import Alert
from spendalerts.feed.engine import AlertFeedEngine
from spendalerts.feed.queries import unread_count
from spendalerts.feed.state import NotificationStateStore
from spendalerts.feed.storage import create_storage
from spendalerts.providers.base import SnapshotProvider
from spendalerts.providers.http import HttpSnapshotProvider
from spendalerts.providers.json_file import JsonFileSnapshotProvider

logger = structlog.get_logger(__name__)


def _render_table(feed: list[Alert]) -> str:
    """Render the feed as an ASCII table."""
    lines: list[str] = []
    header = f"{'#':>3}  {'Sev':<7}  {'':1}  {'When':<14}  {'Title':<32}  Id"
    lines.append(header)
    lines.append("-" * len(header))

    for i, alert in enumerate(feed, 1):
        marker = " " if alert.read else "*"
        lines.append(
            f"{i:>3}  {alert.severity.label:<7}  {marker:1}  "
            f"{alert.display_time[:14]:<14}  {alert.title[:32]:<32}  {alert.id}"
        )
        lines.append(f"{'':>3}  {alert.message}")

    lines.append("")
    lines.append(f"{len(feed)} alerts, {unread_count(feed)} unread")
    return "\n".join(lines)


def _feed_to_json(feed: list[Alert]) -> str:
    rows = [
        {**a.model_dump(mode="json"), "severity": a.severity.label}
        for a in feed
    ]
    return json.dumps(rows, indent=2)


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.astimezone()


def build_provider(settings: Settings, snapshot_path: str | None = None) -> SnapshotProvider:
    """Build the provider named by config; --snapshot forces the JSON file provider."""
    if snapshot_path or settings.provider.kind == "json_file":
        return JsonFileSnapshotProvider(snapshot_path or settings.provider.snapshot_path)
    return HttpSnapshotProvider(settings.provider)


async def run(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    setup_logging(level=args.log_level, fmt="console")

    state = NotificationStateStore(create_storage(settings.storage), settings.storage)
    now = _parse_now(args.now)

    async with build_provider(settings, args.snapshot) as provider:
        engine = AlertFeedEngine(provider, state, thresholds=settings.thresholds)
        feed = await engine.refresh_feed(now)

        if args.command == "read":
            if args.alert_id not in {a.id for a in feed}:
                logger.warning("alert_not_in_feed", alert_id=args.alert_id)
            feed = await engine.mark_read(feed, args.alert_id)
        elif args.command == "read-all":
            feed = await engine.mark_all_read(feed)
        elif args.command == "dismiss":
            if args.alert_id not in {a.id for a in feed}:
                logger.warning("alert_not_in_feed", alert_id=args.alert_id)
            feed = await engine.dismiss(feed, args.alert_id)
        elif args.command == "clear":
            feed = await engine.clear_all(feed)

    if args.json:
        print(_feed_to_json(feed))
    else:
        print(_render_table(feed))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Regenerate the personal-finance alert feed.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--snapshot",
        default=None,
        help="Snapshot JSON file (overrides the configured provider)",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Evaluation time as ISO 8601 (default: current local time)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    parser.add_argument("--json", action="store_true", help="Print the feed as JSON")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("show", help="Print the ranked feed")
    read = sub.add_parser("read", help="Mark one alert as read")
    read.add_argument("alert_id")
    sub.add_parser("read-all", help="Mark every alert in the feed as read")
    dismiss = sub.add_parser("dismiss", help="Dismiss one alert")
    dismiss.add_argument("alert_id")
    sub.add_parser("clear", help="Dismiss every alert in the feed")

    args = parser.parse_args()
    if args.command is None:
        args.command = "show"

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
