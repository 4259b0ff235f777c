"""cmdlang - table-driven command-language parser."""

from .actions import ActionRegistry, TraceDispatcher
from .core import CommandParser, GrammarBuilder, GrammarTable, ParseOutcome, parse_command

__version__ = "0.1.0"

__all__ = [
    "ActionRegistry",
    "CommandParser",
    "GrammarBuilder",
    "GrammarTable",
    "ParseOutcome",
    "TraceDispatcher",
    "parse_command",
]
