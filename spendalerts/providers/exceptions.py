"""Exception hierarchy for snapshot providers."""

from __future__ import annotations


class SnapshotError(Exception):
    """Base exception for all snapshot provider errors."""


class SnapshotFetchError(SnapshotError):
    """A domain's data could not be retrieved (file, HTTP, ...)."""


class SnapshotParseError(SnapshotError):
    """A provider returned data in an unexpected shape."""
