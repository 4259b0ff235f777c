import pytest

from cmdlang.core.captures import CaptureStack
from cmdlang.errors import CaptureStackOverflow, DuplicateCaptureError, GrammarError


def test_push_then_get() -> None:
    stack = CaptureStack()
    stack.push("direction", "left")
    assert stack.get("direction") == "left"
    assert "direction" in stack
    assert len(stack) == 1


def test_get_missing_identifier_returns_none() -> None:
    assert CaptureStack().get("workspace") is None


def test_clear_discards_everything() -> None:
    stack = CaptureStack()
    stack.push("ctype", "class")
    stack.push("cvalue", "Firefox")
    stack.clear()
    assert len(stack) == 0
    assert stack.get("ctype") is None


def test_overflow_is_a_grammar_error() -> None:
    stack = CaptureStack(capacity=10)
    for index in range(10):
        stack.push(f"id{index}", str(index))

    with pytest.raises(CaptureStackOverflow) as excinfo:
        stack.push("one_too_many", "x")
    assert isinstance(excinfo.value, GrammarError)
    assert excinfo.value.capacity == 10
    assert "one_too_many" not in stack


def test_duplicate_identifier_is_rejected() -> None:
    stack = CaptureStack()
    stack.push("mark", "a")
    with pytest.raises(DuplicateCaptureError):
        stack.push("mark", "b")
    assert stack.get("mark") == "a"


def test_as_dict_is_a_copy() -> None:
    stack = CaptureStack()
    stack.push("comment", "hi")
    snapshot = stack.as_dict()
    stack.clear()
    assert snapshot == {"comment": "hi"}


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        CaptureStack(capacity=0)
