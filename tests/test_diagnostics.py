from cmdlang.core.diagnostics import Diagnostic, build_diagnostic
from cmdlang.core.grammar import INITIAL, GotoState, end, literal, string


def test_message_quotes_literals_and_brackets_other_tokens() -> None:
    tokens = [literal("move", GotoState(INITIAL)), string(GotoState(INITIAL)), end(GotoState(INITIAL))]
    diagnostic = build_diagnostic("bogus", 0, INITIAL, tokens)
    assert diagnostic.message == "Expected one of these tokens: 'move', <string>, <end>"


def test_annotation_marks_failing_position_onwards() -> None:
    diagnostic = Diagnostic(input="move sideways", position=5, state="MOVE", expected=("'left'",))
    assert diagnostic.annotated_input == "     ^^^^^^^^"
    assert len(diagnostic.annotated_input) == len(diagnostic.input)


def test_render_aligns_carets_under_command() -> None:
    diagnostic = Diagnostic(input="kill x", position=5, state="KILL", expected=("'window'", "<end>"))
    lines = diagnostic.render().splitlines()
    assert lines[0] == "Expected one of these tokens: 'window', <end>"
    assert lines[1] == "Your command: kill x"
    assert lines[2] == "                   ^"
    assert lines[1].index("x") == lines[2].index("^")


def test_as_dict() -> None:
    diagnostic = Diagnostic(input="foo", position=0, state=INITIAL, expected=("'move'",))
    assert diagnostic.as_dict() == {
        "message": "Expected one of these tokens: 'move'",
        "annotated_input": "^^^",
        "input": "foo",
        "position": 0,
        "state": INITIAL,
    }
