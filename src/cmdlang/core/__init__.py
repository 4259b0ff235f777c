"""Core parsing engine for cmdlang."""

from .captures import CaptureLookup, CaptureStack
from .diagnostics import Diagnostic
from .grammar import INITIAL, GotoState, GrammarBuilder, GrammarTable, Invoke, TokenKind, TokenSpec
from .parser import CommandParser, parse_command
from .types import ActionDispatcher, ParseOutcome

__all__ = [
    "INITIAL",
    "ActionDispatcher",
    "CaptureLookup",
    "CaptureStack",
    "CommandParser",
    "Diagnostic",
    "GotoState",
    "GrammarBuilder",
    "GrammarTable",
    "Invoke",
    "ParseOutcome",
    "TokenKind",
    "TokenSpec",
    "parse_command",
]
