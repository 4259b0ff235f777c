import pytest

from cmdlang.core.grammar import GotoState, end, literal, string, word
from cmdlang.core.tokenizer import ParseCursor, match_token

NEXT = GotoState("NEXT")


def test_cursor_skips_spaces_and_tabs_only() -> None:
    cursor = ParseCursor(" \t move")
    cursor.skip_whitespace()
    assert cursor.position == 3
    assert cursor.current == "m"


def test_cursor_never_moves_backwards() -> None:
    cursor = ParseCursor("kill")
    with pytest.raises(ValueError):
        cursor.advance(-1)


def test_literal_is_case_insensitive_and_yields_its_own_text() -> None:
    match = match_token(literal("move", NEXT), ParseCursor("MoVe left"))
    assert match is not None
    assert match.value == "move"
    assert match.consumed == 4


def test_literal_is_a_prefix_match() -> None:
    assert match_token(literal("move", NEXT), ParseCursor("movement")) is not None
    assert match_token(literal("move", NEXT), ParseCursor("mov")) is None


def test_match_does_not_move_the_cursor() -> None:
    cursor = ParseCursor("left")
    match_token(word(NEXT), cursor)
    match_token(literal("right", NEXT), cursor)
    assert cursor.position == 0


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("firefox --new", "firefox"),
        ("a\tb", "a"),
        ("Mail] kill", "Mail"),
        ("2, kill", "2"),
        ("2; kill", "2"),
        ("last", "last"),
    ],
)
def test_word_stops_at_delimiters(text: str, expected: str) -> None:
    match = match_token(word(NEXT), ParseCursor(text))
    assert match is not None
    assert match.value == expected
    assert match.consumed == len(expected)


def test_string_keeps_spaces_until_separator() -> None:
    match = match_token(string(NEXT), ParseCursor("my workspace name; kill"))
    assert match is not None
    assert match.value == "my workspace name"


@pytest.mark.parametrize("text", ["", ",", ";", "; kill"])
def test_empty_unquoted_free_text_is_no_match(text: str) -> None:
    assert match_token(word(NEXT), ParseCursor(text)) is None
    assert match_token(string(NEXT), ParseCursor(text)) is None


def test_word_is_no_match_on_closing_bracket() -> None:
    assert match_token(word(NEXT), ParseCursor("]")) is None


def test_quoted_phrase_keeps_escaped_quotes() -> None:
    text = '"a \\"quoted word\\" here"'
    match = match_token(word(NEXT), ParseCursor(text))
    assert match is not None
    assert match.value == 'a \\"quoted word\\" here'
    assert match.consumed == len(text)


def test_quoted_word_may_contain_delimiters() -> None:
    match = match_token(word(NEXT), ParseCursor('"two words; one, arg" kill'))
    assert match is not None
    assert match.value == "two words; one, arg"


def test_empty_quoted_phrase_is_an_empty_capture() -> None:
    match = match_token(string(NEXT), ParseCursor('""'))
    assert match is not None
    assert match.value == ""
    assert match.consumed == 2


def test_unterminated_quote_is_no_match() -> None:
    assert match_token(word(NEXT), ParseCursor('"never closed')) is None


@pytest.mark.parametrize(("text", "terminator"), [("", ""), (", kill", ","), ("; kill", ";")])
def test_end_matches_terminators(text: str, terminator: str) -> None:
    match = match_token(end(NEXT), ParseCursor(text))
    assert match is not None
    assert match.value is None
    assert match.consumed == 1
    assert match.terminator == terminator


def test_end_does_not_match_text() -> None:
    assert match_token(end(NEXT), ParseCursor("kill")) is None


def test_matching_starts_at_the_cursor_position() -> None:
    cursor = ParseCursor('mark "a b" Move x', position=5)
    quoted = match_token(word(NEXT), cursor)
    assert quoted is not None
    assert quoted.value == "a b"
    assert quoted.consumed == 5

    cursor.advance(quoted.consumed)
    cursor.skip_whitespace()
    keyword = match_token(literal("move", NEXT), cursor)
    assert keyword is not None
    assert keyword.consumed == 4
    assert match_token(string(NEXT), cursor).value == "Move x"
    assert cursor.position == 11
