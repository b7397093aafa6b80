"""Unique id generation for nodes and edges.

This module provides an IdGenerator protocol so that the one piece of
process-wide state in the workflow core is isolated behind an explicit
``next()`` call.

Production code uses NanoIdGenerator (the default).
Tests inject SequentialIdGenerator for predictable ids.
"""

from __future__ import annotations

import itertools
import secrets
import string
from typing import Protocol

_LETTERS = string.ascii_letters
_ALPHABET = string.ascii_letters + string.digits

MIN_ID_LENGTH = 6
DEFAULT_ID_LENGTH = 12


class IdGenerator(Protocol):
    """Source of ids that are practically unique within a session."""

    def next(self) -> str:
        """Return a fresh id."""
        ...


class NanoIdGenerator:
    """Short random alphanumeric ids, always starting with a letter.

    The leading letter keeps ids usable as HTML ids and CSS selectors on the
    canvas. Nothing is remembered between calls: at the default length the
    id space (52 * 62**11) makes a repeat within one session negligible.
    """

    def __init__(self, length: int = DEFAULT_ID_LENGTH) -> None:
        """Initialize the generator.

        Args:
            length: Number of characters per id (minimum 6).

        Raises:
            ValueError: If length is below the minimum.
        """
        if length < MIN_ID_LENGTH:
            raise ValueError(f"Id length must be at least {MIN_ID_LENGTH}, got {length}")
        self._length = length

    def next(self) -> str:
        return secrets.choice(_LETTERS) + "".join(secrets.choice(_ALPHABET) for _ in range(self._length - 1))


class SequentialIdGenerator:
    """Predictable ids for tests: ``prefix1``, ``prefix2``, ...

    Example:
        ids = SequentialIdGenerator(prefix="node")
        ids.next()  # "node1"
        ids.next()  # "node2"
    """

    def __init__(self, prefix: str = "id", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def next(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


# Default generator for production use
DEFAULT_ID_GENERATOR: IdGenerator = NanoIdGenerator()
