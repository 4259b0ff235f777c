"""Load grammar tables from YAML documents.

A document lists, per state, the tokens in the order they are tried:

    initial: INITIAL
    states:
      INITIAL:
        - {literal: move, goto: MOVE}
        - {end: true}
      MOVE:
        - {literal: [left, right], capture: direction, call: cmd_move}

A token without `goto` or `call` stays in its state, except `end`, which
returns to the initial state. `then` names the state entered after a `call`.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from cmdlang.core.grammar import INITIAL, GrammarBuilder, GrammarTable, StateBuilder
from cmdlang.errors import GrammarError


class TokenDocument(BaseModel):
    """One token entry of a state."""

    model_config = ConfigDict(extra="forbid")

    literal: str | list[str] | None = None
    word: bool = False
    string: bool = False
    end: bool = False
    capture: str | None = None
    goto: str | None = None
    call: str | None = None
    then: str | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> TokenDocument:
        kinds = [self.literal is not None, self.word, self.string, self.end]
        if sum(kinds) != 1:
            raise ValueError("token must be exactly one of literal, word, string or end")
        if self.goto is not None and self.call is not None:
            raise ValueError("token cannot have both goto and call")
        if self.then is not None and self.call is None:
            raise ValueError("'then' is only valid together with 'call'")
        if self.end and self.capture is not None:
            raise ValueError("end token cannot capture")
        return self


class GrammarDocument(BaseModel):
    """Whole grammar file."""

    model_config = ConfigDict(extra="forbid")

    initial: str = INITIAL
    states: dict[str, list[TokenDocument]]


def grammar_from_mapping(payload: Mapping[str, Any]) -> GrammarTable:
    """Build and validate a grammar table from an already parsed document."""

    try:
        document = GrammarDocument.model_validate(payload)
    except ValidationError as exc:
        raise GrammarError(f"invalid grammar document: {exc}") from exc

    builder = GrammarBuilder(initial=document.initial)
    for state_name, tokens in document.states.items():
        state = builder.state(state_name)
        for token in tokens:
            _add_token(builder, state, token)
    return builder.build()


def load_grammar(path: Path) -> GrammarTable:
    """Read a YAML grammar file."""

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise GrammarError(f"cannot read grammar {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise GrammarError(f"grammar {path} must be a mapping")
    return grammar_from_mapping(payload)


def _add_token(builder: GrammarBuilder, state: StateBuilder, token: TokenDocument) -> None:
    call = builder.call(token.call, next_state=token.then) if token.call is not None else None
    if token.literal is not None:
        texts = [token.literal] if isinstance(token.literal, str) else token.literal
        state.literal(*texts, capture=token.capture, goto=token.goto, call=call)
    elif token.word:
        state.word(capture=token.capture, goto=token.goto, call=call)
    elif token.string:
        state.string(capture=token.capture, goto=token.goto, call=call)
    else:
        state.end(goto=token.goto, call=call)
