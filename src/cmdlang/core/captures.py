"""Bounded store for identifiers captured while parsing one command."""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from cmdlang.errors import CaptureStackOverflow, DuplicateCaptureError

DEFAULT_CAPACITY = 10


class CaptureLookup(Protocol):
    """Read-only view of the captures handed to actions."""

    def get(self, identifier: str) -> str | None: ...

    def as_dict(self) -> dict[str, str]: ...


class CaptureStack:
    """Identifier to text mapping, scoped to a single command.

    Overflowing the capacity or capturing one identifier twice means the
    grammar is broken, so both raise a `GrammarError` subclass and abort the
    parse instead of being reported as bad user input.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capture stack capacity must be positive")
        self.capacity = capacity
        self._entries: dict[str, str] = {}

    def push(self, identifier: str, value: str) -> None:
        if identifier in self._entries:
            raise DuplicateCaptureError(identifier)
        if len(self._entries) >= self.capacity:
            raise CaptureStackOverflow(identifier, self.capacity)
        self._entries[identifier] = value

    def get(self, identifier: str) -> str | None:
        logger.debug("captures.get identifier={}", identifier)
        return self._entries.get(identifier)

    def clear(self) -> None:
        if self._entries:
            logger.debug("captures.clear count={}", len(self._entries))
        self._entries.clear()

    def as_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __repr__(self) -> str:
        return f"CaptureStack({self._entries!r}, capacity={self.capacity})"
