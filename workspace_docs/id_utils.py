"""ID generation and parsing utilities for workspace entities.

Centralizes the ID format knowledge so callers never need to
construct or parse entity IDs directly.

Timestamp IDs: {prefix}-{epoch_ms}-{suffix}   e.g. page-1735689600000-k3j9x0a
Sequential IDs: {prefix}-{n}                   e.g. block-7

The prefix names the entity kind ("page", "block", "user").
"""

from __future__ import annotations

import secrets
import string
import time
from threading import Lock
from typing import Protocol

_BASE36 = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 7


class IdGenerator(Protocol):
    """Anything that can mint entity IDs."""

    def new_id(self, prefix: str) -> str: ...


class TimestampIdGenerator:
    """Generates IDs from the wall clock plus a random base36 suffix."""

    def new_id(self, prefix: str) -> str:
        """Generate a new ID with the given prefix."""
        millis = int(time.time() * 1000)
        suffix = "".join(secrets.choice(_BASE36) for _ in range(_SUFFIX_LENGTH))
        return f"{prefix}-{millis}-{suffix}"


class SequentialIdGenerator:
    """Simple sequential generator for demos and tests.

    Keeps one counter per prefix, so the first page is ``page-1`` and the
    first block is ``block-1``.
    """

    def __init__(self, start: int = 1) -> None:
        """Initialize with starting number.

        Args:
            start: First number handed out for every prefix
        """
        self._start = start
        self._counters: dict[str, int] = {}
        self._lock = Lock()

    def new_id(self, prefix: str) -> str:
        """Get the next ID for a prefix."""
        with self._lock:
            current = self._counters.get(prefix, self._start - 1) + 1
            self._counters[prefix] = current
            return f"{prefix}-{current}"

    def advance_past(self, entity_id: str) -> None:
        """Make sure future IDs never collide with an existing sequential ID."""
        prefix = parse_id_prefix(entity_id)
        tail = entity_id[len(prefix) + 1 :]
        if not tail.isdigit():
            return
        with self._lock:
            if int(tail) > self._counters.get(prefix, self._start - 1):
                self._counters[prefix] = int(tail)


def parse_id_prefix(entity_id: str) -> str:
    """Extract the entity-kind prefix from an ID.

    Raises ValueError on malformed input.
    """
    prefix, sep, rest = entity_id.partition("-")
    if not sep or not prefix or not rest:
        raise ValueError(f"Malformed entity ID: {entity_id}")
    return prefix
