"""Matching one token rule against the input at the cursor."""

from __future__ import annotations

from dataclasses import dataclass

from cmdlang.core.grammar import TokenKind, TokenSpec

WHITESPACE = frozenset(" \t")
COMMAND_SEPARATORS = frozenset(",;")
WORD_DELIMITERS = WHITESPACE | COMMAND_SEPARATORS | {"]"}
QUOTE = '"'
ESCAPE = "\\"


class ParseCursor:
    """Input text plus a read position that only ever moves forward."""

    def __init__(self, text: str, position: int = 0) -> None:
        self.text = text
        self.position = position

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    @property
    def current(self) -> str:
        """Character under the cursor, or an empty string at end of input."""
        return self.text[self.position] if self.position < len(self.text) else ""

    def skip_whitespace(self) -> None:
        while self.current in WHITESPACE and not self.at_end:
            self.position += 1

    def advance(self, count: int) -> None:
        if count < 0:
            raise ValueError("cursor cannot move backwards")
        self.position += count


@dataclass(frozen=True)
class TokenMatch:
    """Successful match of one token.

    `value` is None for tokens that produce nothing to capture (end tokens).
    `consumed` counts every character the driver must skip, including quotes
    and a consumed command terminator.
    """

    value: str | None
    consumed: int
    terminator: str = ""


def match_token(token: TokenSpec, cursor: ParseCursor) -> TokenMatch | None:
    """Try `token` at the cursor without moving it. Returns None on no match."""

    if token.kind is TokenKind.LITERAL:
        return _match_literal(token.text or "", cursor.text, cursor.position)
    if token.kind is TokenKind.WORD:
        return _match_free_text(cursor.text, cursor.position, WORD_DELIMITERS)
    if token.kind is TokenKind.STRING:
        return _match_free_text(cursor.text, cursor.position, COMMAND_SEPARATORS)
    return _match_end(cursor)


def _match_literal(literal: str, text: str, start: int) -> TokenMatch | None:
    candidate = text[start : start + len(literal)]
    if len(candidate) == len(literal) and candidate.lower() == literal.lower():
        return TokenMatch(value=literal, consumed=len(literal))
    return None


def _match_free_text(text: str, start: int, delimiters: frozenset[str]) -> TokenMatch | None:
    if text.startswith(QUOTE, start):
        return _match_quoted(text, start)

    index = start
    while index < len(text) and text[index] not in delimiters:
        index += 1
    if index == start:
        return None
    return TokenMatch(value=text[start:index], consumed=index - start)


def _match_quoted(text: str, start: int) -> TokenMatch | None:
    index = start + 1
    while index < len(text):
        if text[index] == QUOTE and text[index - 1] != ESCAPE:
            # both quotes are consumed but not captured
            return TokenMatch(value=text[start + 1 : index], consumed=index - start + 1)
        index += 1
    return None


def _match_end(cursor: ParseCursor) -> TokenMatch | None:
    if cursor.at_end:
        return TokenMatch(value=None, consumed=1)
    if cursor.current in COMMAND_SEPARATORS:
        return TokenMatch(value=None, consumed=1, terminator=cursor.current)
    return None
