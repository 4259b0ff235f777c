"""Dispatcher that records invocations instead of performing them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cmdlang.core.captures import CaptureLookup
from cmdlang.core.grammar import ActionId, GrammarTable


@dataclass(frozen=True)
class TracedCall:
    action: str
    args: dict[str, str]

    def __str__(self) -> str:
        rendered = ", ".join(f"{key}={value!r}" for key, value in sorted(self.args.items()))
        return f"call {self.action}({rendered})"

    def as_dict(self) -> dict[str, Any]:
        return {"action": self.action, "args": dict(self.args)}


@dataclass
class TraceDispatcher:
    """Records every action with the captures it saw.

    Also usable as the parser's command-boundary hook through
    `mark_boundary`, which counts how many commands have been completed.
    """

    grammar: GrammarTable
    calls: list[TracedCall] = field(default_factory=list)
    boundaries: int = 0

    def invoke(self, action_id: ActionId, captures: CaptureLookup) -> dict[str, Any]:
        call = TracedCall(action=self.grammar.action_name(action_id), args=captures.as_dict())
        self.calls.append(call)
        return call.as_dict()

    def mark_boundary(self) -> None:
        self.boundaries += 1

    def lines(self) -> list[str]:
        return [str(call) for call in self.calls]
