"""Application-level exception types for cmdlang."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdlang.core.diagnostics import Diagnostic


class CmdlangError(Exception):
    """Base exception for cmdlang."""


class ConfigurationError(CmdlangError):
    """Base exception for configuration and grammar authoring errors."""


class GrammarError(ConfigurationError):
    """Raised when a grammar table is malformed or exceeds parser limits."""


class CaptureStackOverflow(GrammarError):
    """Raised when a command captures more identifiers than the stack holds."""

    def __init__(self, identifier: str, capacity: int) -> None:
        self.identifier = identifier
        self.capacity = capacity
        super().__init__(f"capture stack full ({capacity} entries) while pushing '{identifier}'")


class DuplicateCaptureError(GrammarError):
    """Raised when an identifier is captured twice within one command."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"identifier '{identifier}' captured twice in one command")


class UnknownActionError(ConfigurationError):
    """Raised when no handler is registered for an invoked action."""


class InputTooLongError(CmdlangError):
    """Raised when a command string exceeds the configured input bound."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"command is {length} characters long, limit is {limit}")


class UnmatchedTokenError(CmdlangError):
    """Raised on request when a command could not be parsed."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)
