from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from cmdlang.actions import TraceDispatcher
from cmdlang.core.grammar import GrammarTable
from cmdlang.grammars import window_manager_grammar


@pytest.fixture
def grammar() -> GrammarTable:
    return window_manager_grammar()


@pytest.fixture
def trace(grammar: GrammarTable) -> TraceDispatcher:
    return TraceDispatcher(grammar)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
