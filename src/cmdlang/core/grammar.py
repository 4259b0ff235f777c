"""Grammar table: per-state ordered token lists and their transitions.

The table is plain immutable data. It is built once (by hand, through
`GrammarBuilder`, or from a YAML document via `cmdlang.grammars.loader`) and
shared read-only by every parse.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TypeAlias

from cmdlang.errors import GrammarError

State: TypeAlias = str
ActionId: TypeAlias = int

INITIAL: State = "INITIAL"


class TokenKind(Enum):
    """What a token matches at the cursor."""

    LITERAL = "literal"
    WORD = "word"  # free text up to whitespace, ']', ',' or ';'
    STRING = "string"  # free text up to ',' or ';'
    END = "end"


@dataclass(frozen=True)
class GotoState:
    """Move to another state."""

    state: State


@dataclass(frozen=True)
class Invoke:
    """Call an action, then continue in `next_state` (the initial state when unset).

    The calling state is not kept: a grammar that wants to stay there after
    the action must name it as `next_state`.
    """

    action_id: ActionId
    next_state: State | None = None


Transition: TypeAlias = GotoState | Invoke


@dataclass(frozen=True)
class TokenSpec:
    """One match rule of a state."""

    kind: TokenKind
    transition: Transition
    text: str | None = None
    capture: str | None = None

    @property
    def display_name(self) -> str:
        if self.kind is TokenKind.LITERAL:
            return f"'{self.text}'"
        return f"<{self.kind.value}>"


def literal(text: str, transition: Transition, *, capture: str | None = None) -> TokenSpec:
    return TokenSpec(kind=TokenKind.LITERAL, transition=transition, text=text, capture=capture)


def word(transition: Transition, *, capture: str | None = None) -> TokenSpec:
    return TokenSpec(kind=TokenKind.WORD, transition=transition, capture=capture)


def string(transition: Transition, *, capture: str | None = None) -> TokenSpec:
    return TokenSpec(kind=TokenKind.STRING, transition=transition, capture=capture)


def end(transition: Transition) -> TokenSpec:
    return TokenSpec(kind=TokenKind.END, transition=transition)


@dataclass(frozen=True)
class GrammarTable:
    """Immutable mapping of states to ordered token lists."""

    states: Mapping[State, tuple[TokenSpec, ...]]
    actions: Mapping[ActionId, str]
    initial: State = INITIAL
    _action_ids: Mapping[str, ActionId] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        states = {name: tuple(tokens) for name, tokens in self.states.items()}
        actions = dict(self.actions)
        object.__setattr__(self, "states", MappingProxyType(states))
        object.__setattr__(self, "actions", MappingProxyType(actions))
        object.__setattr__(self, "_action_ids", MappingProxyType({name: ident for ident, name in actions.items()}))

    def tokens(self, state: State) -> tuple[TokenSpec, ...]:
        try:
            return self.states[state]
        except KeyError:
            raise GrammarError(f"unknown state: {state}") from None

    def action_name(self, action_id: ActionId) -> str:
        try:
            return self.actions[action_id]
        except KeyError:
            raise GrammarError(f"unknown action id: {action_id}") from None

    def action_id(self, name: str) -> ActionId:
        try:
            return self._action_ids[name]
        except KeyError:
            raise GrammarError(f"unknown action: {name}") from None

    def next_state_after(self, invoke: Invoke) -> State:
        return invoke.next_state if invoke.next_state is not None else self.initial

    def validate(self) -> GrammarTable:
        """Check the table is internally consistent; returns self for chaining."""

        if self.initial not in self.states:
            raise GrammarError(f"initial state {self.initial} has no token list")
        for state, tokens in self.states.items():
            if not tokens:
                raise GrammarError(f"state {state} has no tokens")
            for token in tokens:
                self._validate_token(state, token)
        return self

    def _validate_token(self, state: State, token: TokenSpec) -> None:
        if token.kind is TokenKind.LITERAL and not token.text:
            raise GrammarError(f"state {state}: literal token without text")
        if token.kind is TokenKind.END and token.capture is not None:
            raise GrammarError(f"state {state}: end token cannot capture '{token.capture}'")

        transition = token.transition
        if isinstance(transition, GotoState):
            target = transition.state
            if token.capture is not None and target == state:
                raise GrammarError(
                    f"state {state}: token {token.display_name} captures '{token.capture}' and loops back to its own state"
                )
        else:
            if transition.action_id not in self.actions:
                raise GrammarError(f"state {state}: token {token.display_name} calls unknown action id {transition.action_id}")
            target = self.next_state_after(transition)
        if target not in self.states:
            raise GrammarError(f"state {state}: token {token.display_name} leads to unknown state {target}")


class GrammarBuilder:
    """Incrementally assemble a `GrammarTable`.

    Example:
        builder = GrammarBuilder()
        builder.state(INITIAL).literal("kill", call=builder.call("cmd_kill")).end()
        grammar = builder.build()
    """

    def __init__(self, initial: State = INITIAL) -> None:
        self.initial = initial
        self._states: dict[State, list[TokenSpec]] = {}
        self._actions: dict[str, ActionId] = {}

    def call(self, name: str, next_state: State | None = None) -> Invoke:
        action_id = self._actions.setdefault(name, len(self._actions))
        return Invoke(action_id=action_id, next_state=next_state)

    def state(self, name: State) -> StateBuilder:
        return StateBuilder(self, name, self._states.setdefault(name, []))

    def build(self) -> GrammarTable:
        actions = {ident: name for name, ident in self._actions.items()}
        return GrammarTable(states=self._states, actions=actions, initial=self.initial).validate()


class StateBuilder:
    """Appends tokens to one state, in declaration order."""

    def __init__(self, builder: GrammarBuilder, name: State, tokens: list[TokenSpec]) -> None:
        self._builder = builder
        self.name = name
        self._tokens = tokens

    def _transition(self, goto: State | None, call: Invoke | None) -> Transition:
        if goto is not None and call is not None:
            raise GrammarError(f"state {self.name}: token cannot both goto {goto} and call an action")
        if call is not None:
            return call
        return GotoState(goto if goto is not None else self.name)

    def literal(
        self,
        *texts: str,
        capture: str | None = None,
        goto: State | None = None,
        call: Invoke | None = None,
    ) -> StateBuilder:
        transition = self._transition(goto, call)
        self._tokens.extend(literal(text, transition, capture=capture) for text in texts)
        return self

    def word(self, *, capture: str | None = None, goto: State | None = None, call: Invoke | None = None) -> StateBuilder:
        self._tokens.append(word(self._transition(goto, call), capture=capture))
        return self

    def string(self, *, capture: str | None = None, goto: State | None = None, call: Invoke | None = None) -> StateBuilder:
        self._tokens.append(string(self._transition(goto, call), capture=capture))
        return self

    def end(self, *, goto: State | None = None, call: Invoke | None = None) -> StateBuilder:
        if goto is None and call is None:
            goto = self._builder.initial
        self._tokens.append(end(self._transition(goto, call)))
        return self
