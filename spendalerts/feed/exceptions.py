"""Notification-state persistence exceptions."""

from __future__ import annotations


class StateError(Exception):
    """Base exception for notification-state errors."""


class StorageError(StateError):
    """A key-value storage backend failed to read or write."""
