"""Registry mapping grammar actions to Python handlers."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from loguru import logger

from cmdlang.core.captures import CaptureLookup
from cmdlang.core.grammar import ActionId, GrammarTable
from cmdlang.errors import UnknownActionError

ActionHandler: TypeAlias = Callable[..., Any]


def _shorten_text(text: str, width: int = 30, placeholder: str = "...") -> str:
    if len(text) <= width:
        return text
    available = width - len(placeholder)
    if available <= 0:
        return placeholder
    return text[:available] + placeholder


@dataclass(frozen=True)
class ActionDescriptor:
    """Action metadata and runtime handle."""

    name: str
    handler: ActionHandler
    params: tuple[str, ...] = ()
    description: str = ""

    def resolve(self, captures: CaptureLookup) -> dict[str, str | None]:
        """Keyword arguments for the handler; parameters never captured resolve to None."""
        return {param: captures.get(param) for param in self.params}


class ActionRegistry:
    """Dispatches grammar actions to registered handlers.

    Handlers receive their declared parameters as keyword arguments, looked
    up in the capture stack of the command being parsed:

        registry = ActionRegistry(grammar)

        @registry.register("cmd_move", params=("direction",))
        def move(*, direction: str | None) -> dict[str, bool]:
            ...
    """

    def __init__(self, grammar: GrammarTable) -> None:
        self.grammar = grammar
        self._actions: dict[str, ActionDescriptor] = {}

    def register(
        self,
        name: str,
        handler: ActionHandler | None = None,
        *,
        params: tuple[str, ...] = (),
        description: str = "",
    ) -> Any:
        # validates that the grammar knows the action
        self.grammar.action_id(name)

        def _register(func: ActionHandler) -> ActionHandler:
            self._actions[name] = ActionDescriptor(name=name, handler=func, params=params, description=description)
            return func

        if handler is None:
            return _register
        return _register(handler)

    def has(self, name: str) -> bool:
        return name in self._actions

    def get(self, name: str) -> ActionDescriptor | None:
        return self._actions.get(name)

    def descriptors(self) -> list[ActionDescriptor]:
        return sorted(self._actions.values(), key=lambda item: item.name)

    def missing(self) -> list[str]:
        """Grammar actions that have no handler yet."""
        return sorted(name for name in self.grammar.actions.values() if name not in self._actions)

    def invoke(self, action_id: ActionId, captures: CaptureLookup) -> Any | None:
        name = self.grammar.action_name(action_id)
        descriptor = self.get(name)
        if descriptor is None:
            raise UnknownActionError(f"no handler registered for action: {name}")

        kwargs = descriptor.resolve(captures)
        self._log_action_call(name, kwargs)
        start = time.monotonic()
        try:
            return descriptor.handler(**kwargs)
        except Exception:
            logger.exception("action.call.error name={}", name)
            raise
        finally:
            duration = time.monotonic() - start
            logger.info("action.call.end name={} duration={:.3f}ms", name, duration * 1000)

    def _log_action_call(self, name: str, kwargs: dict[str, str | None]) -> None:
        params = ", ".join(f"{key}={_shorten_text(repr(value))}" for key, value in kwargs.items())
        logger.info("action.call.start name={} {{ {} }}", name, params)
