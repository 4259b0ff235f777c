"""Diagnostics for commands the grammar cannot match."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from cmdlang.core.grammar import State, TokenSpec

MESSAGE_PREFIX = "Expected one of these tokens: "
COMMAND_LABEL = "Your command: "


@dataclass(frozen=True)
class Diagnostic:
    """Where parsing stopped and which tokens would have been accepted there."""

    input: str
    position: int
    state: State
    expected: tuple[str, ...]

    @property
    def message(self) -> str:
        return MESSAGE_PREFIX + ", ".join(self.expected)

    @property
    def annotated_input(self) -> str:
        """Same length as the input: blanks before the failing position, carets from it on."""
        return "".join("^" if index >= self.position else " " for index in range(len(self.input)))

    def render(self) -> str:
        padding = " " * len(COMMAND_LABEL)
        return f"{self.message}\n{COMMAND_LABEL}{self.input}\n{padding}{self.annotated_input}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "annotated_input": self.annotated_input,
            "input": self.input,
            "position": self.position,
            "state": self.state,
        }


def build_diagnostic(text: str, position: int, state: State, tokens: Iterable[TokenSpec]) -> Diagnostic:
    return Diagnostic(
        input=text,
        position=position,
        state=state,
        expected=tuple(token.display_name for token in tokens),
    )
