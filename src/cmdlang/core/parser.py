"""State machine driving the grammar table over one command string.

The loop is intentionally simple: skip whitespace, try the current state's
tokens in declaration order, take the first one that matches, apply its
transition and move on. There is no backtracking and no search for a longer
match; grammars rely on earlier alternatives shadowing later ones.
"""

from __future__ import annotations

from loguru import logger

from cmdlang.core.captures import DEFAULT_CAPACITY, CaptureStack
from cmdlang.core.diagnostics import build_diagnostic
from cmdlang.core.grammar import GotoState, GrammarTable, Invoke, State, TokenKind, TokenSpec
from cmdlang.core.tokenizer import ParseCursor, TokenMatch, match_token
from cmdlang.core.types import ActionDispatcher, BoundaryHook, ParseOutcome
from cmdlang.errors import InputTooLongError

COMMAND_END_TERMINATORS = frozenset({"", ";"})


class CommandParser:
    """Parses command strings against a grammar and dispatches the actions they name.

    The parser keeps no per-parse state: every `parse` call runs on its own
    cursor, state and capture stack, so one instance may serve many threads.
    """

    def __init__(
        self,
        grammar: GrammarTable,
        dispatcher: ActionDispatcher,
        *,
        on_command_boundary: BoundaryHook | None = None,
        capture_capacity: int = DEFAULT_CAPACITY,
        max_input_length: int | None = None,
    ) -> None:
        self.grammar = grammar
        self.dispatcher = dispatcher
        self.on_command_boundary = on_command_boundary
        self.capture_capacity = capture_capacity
        self.max_input_length = max_input_length

    def parse(self, text: str) -> ParseOutcome:
        if self.max_input_length is not None and len(text) > self.max_input_length:
            raise InputTooLongError(len(text), self.max_input_length)

        logger.debug("parser.start input={!r}", text)
        run = _ParseRun(self, text)
        outcome = run.execute()
        if outcome.ok:
            logger.debug("parser.done actions={}", outcome.actions)
        else:
            logger.info("parser.unmatched position={} state={}", run.cursor.position, run.state)
        return outcome


class _ParseRun:
    """Mutable state of one parse."""

    def __init__(self, parser: CommandParser, text: str) -> None:
        self.grammar = parser.grammar
        self.dispatcher = parser.dispatcher
        self.on_command_boundary = parser.on_command_boundary
        self.cursor = ParseCursor(text)
        self.state: State = self.grammar.initial
        self.captures = CaptureStack(parser.capture_capacity)
        self.outcome = ParseOutcome()

    def execute(self) -> ParseOutcome:
        # "<=": the end-of-input position is itself tried, so an end token can match there
        while self.cursor.position <= len(self.cursor.text):
            self.cursor.skip_whitespace()
            tokens = self.grammar.tokens(self.state)
            for token in tokens:
                logger.debug("parser.token.try state={} token={}", self.state, token.display_name)
                match = match_token(token, self.cursor)
                if match is not None:
                    self._accept(token, match)
                    break
            else:
                self.outcome.diagnostic = build_diagnostic(
                    self.cursor.text, self.cursor.position, self.state, tokens
                )
                break
        return self.outcome

    def _accept(self, token: TokenSpec, match: TokenMatch) -> None:
        logger.debug("parser.token.matched state={} token={} value={!r}", self.state, token.display_name, match.value)
        if token.capture is not None and match.value is not None:
            self.captures.push(token.capture, match.value)

        self._apply(token)
        if token.kind is TokenKind.END and match.terminator in COMMAND_END_TERMINATORS:
            self._command_boundary()
        self.cursor.advance(match.consumed)

    def _apply(self, token: TokenSpec) -> None:
        transition = token.transition
        if isinstance(transition, GotoState):
            self.state = transition.state
            if self.state == self.grammar.initial:
                self.captures.clear()
            return

        self._invoke(transition)

    def _invoke(self, transition: Invoke) -> None:
        name = self.grammar.action_name(transition.action_id)
        logger.debug("parser.invoke action={} captures={}", name, self.captures.as_dict())
        try:
            result = self.dispatcher.invoke(transition.action_id, self.captures)
        finally:
            self.captures.clear()
        self.outcome.actions.append(name)
        if result is not None:
            self.outcome.results.append(result)
        self.state = self.grammar.next_state_after(transition)

    def _command_boundary(self) -> None:
        if self.on_command_boundary is None:
            return
        logger.debug("parser.context.reset position={}", self.cursor.position)
        self.on_command_boundary()


def parse_command(
    text: str,
    grammar: GrammarTable,
    dispatcher: ActionDispatcher,
    *,
    on_command_boundary: BoundaryHook | None = None,
    capture_capacity: int = DEFAULT_CAPACITY,
    max_input_length: int | None = None,
) -> ParseOutcome:
    """Parse one command string with a freshly built parser."""

    parser = CommandParser(
        grammar,
        dispatcher,
        on_command_boundary=on_command_boundary,
        capture_capacity=capture_capacity,
        max_input_length=max_input_length,
    )
    return parser.parse(text)
