"""Canonical grouping keys for protocol combinations."""

from __future__ import annotations

from collections.abc import Iterable

KEY_SEPARATOR = " · "


def canonical_key(protocols: Iterable[str]) -> str:
    """Order-independent key: protocols sorted lexicographically and joined."""
    return KEY_SEPARATOR.join(sorted(protocols))


__all__ = ["KEY_SEPARATOR", "canonical_key"]
