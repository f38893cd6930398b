"""Read-side helpers over an assembled feed. None of them reorder alerts."""

from __future__ import annotations

from spendalerts.core.types import Alert, AlertCategory, FeedPage, Severity


def unread_count(feed: list[Alert]) -> int:
    return sum(1 for a in feed if not a.read)


def critical_alerts(feed: list[Alert], limit: int = 5) -> list[Alert]:
    """Unread ERROR alerts, highest ranked first, at most *limit*."""
    return [a for a in feed if a.severity == Severity.ERROR and not a.read][:limit]


def filter_feed(
    feed: list[Alert],
    category: AlertCategory | None = None,
    severity: Severity | None = None,
    read: bool | None = None,
) -> list[Alert]:
    """Keep alerts matching every given criterion."""
    return [
        a for a in feed
        if (category is None or a.category == category)
        and (severity is None or a.severity == severity)
        and (read is None or a.read == read)
    ]


def split_by_read(feed: list[Alert]) -> tuple[list[Alert], list[Alert]]:
    """Return (unread, read), each in feed order."""
    return filter_feed(feed, read=False), filter_feed(feed, read=True)


def paginate(feed: list[Alert], page: int = 1, page_size: int = 20) -> FeedPage:
    """Slice the feed into 1-indexed pages."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    start = (page - 1) * page_size
    total = len(feed)
    return FeedPage(
        items=feed[start:start + page_size],
        total=total,
        page=page,
        page_size=page_size,
        has_more=total > page * page_size,
    )
