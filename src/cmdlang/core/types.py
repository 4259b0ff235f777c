"""Shared core types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias

from cmdlang.core.captures import CaptureLookup
from cmdlang.core.diagnostics import Diagnostic
from cmdlang.core.grammar import ActionId
from cmdlang.errors import UnmatchedTokenError

BoundaryHook: TypeAlias = Callable[[], None]


class ActionDispatcher(Protocol):
    """Performs the effect behind an action id. May return a result payload."""

    def invoke(self, action_id: ActionId, captures: CaptureLookup) -> Any | None: ...


@dataclass
class ParseOutcome:
    """Everything one call to `CommandParser.parse` produced."""

    results: list[Any] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    def raise_for_error(self) -> ParseOutcome:
        if self.diagnostic is not None:
            raise UnmatchedTokenError(self.diagnostic)
        return self
