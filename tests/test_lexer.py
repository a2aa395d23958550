import re

import pytest

from paredit_engine.syntax import LexerError, closing_bracket_for, is_map_opening, tokenize
from paredit_engine.syntax import lexer


def kinds(text: str) -> list[tuple[str, str]]:
    return [(token.type, token.raw) for token in tokenize(text)[:-1]]


def test_tokens_tile_the_text() -> None:
    text = '(def foo [:a "b" #{1 2}]) ; done\n#f ^{:m 1} x'
    tokens = tokenize(text)

    assert "".join(token.raw for token in tokens) == text
    assert tokens[-1].type == "eof"
    assert tokens[-1].start == len(text)
    for left, right in zip(tokens, tokens[1:]):
        assert left.end == right.start


def test_basic_list() -> None:
    assert kinds("(def foo [vec])") == [
        ("open", "("),
        ("id", "def"),
        ("ws", " "),
        ("id", "foo"),
        ("ws", " "),
        ("open", "["),
        ("id", "vec"),
        ("close", "]"),
        ("close", ")"),
    ]


def test_prefixed_openings_are_single_tokens() -> None:
    assert kinds("#{") == [("open", "#{")]
    assert kinds("#(") == [("open", "#(")]
    assert kinds("'(") == [("open", "'(")]
    assert kinds("^{") == [("open", "^{")]
    assert kinds("#?(") == [("open", "#?(")]
    assert kinds("#:ns{") == [("open", "#:ns{")]


def test_reader_tags_stay_separate() -> None:
    assert kinds("#f (x)") == [
        ("reader", "#f"),
        ("ws", " "),
        ("open", "("),
        ("id", "x"),
        ("close", ")"),
    ]
    assert kinds("#_x") == [("reader", "#_"), ("id", "x")]


def test_atoms_are_classified() -> None:
    assert kinds("::foo") == [("kw", "::foo")]
    assert kinds("42") == [("lit", "42")]
    assert kinds("-1.5") == [("lit", "-1.5")]
    assert kinds("nil") == [("lit", "nil")]
    assert kinds("'sym") == [("id", "'sym")]
    assert kinds("##Inf") == [("lit", "##Inf")]


def test_character_literals() -> None:
    assert kinds('\\"') == [("lit", '\\"')]
    assert kinds("\\newline") == [("lit", "\\newline")]
    assert kinds("\\a") == [("lit", "\\a")]


def test_strings_and_escapes() -> None:
    tokens = tokenize('"a\\"b" x')

    assert tokens[0].type == "str"
    assert tokens[0].raw == '"a\\"b"'
    assert tokens[0].closed


def test_unterminated_string_runs_to_end() -> None:
    tokens = tokenize('(str "foo')

    assert tokens[-2].type == "str"
    assert tokens[-2].raw == '"foo'
    assert not tokens[-2].closed


def test_commas_are_whitespace_and_comments_stop_at_newline() -> None:
    assert kinds("a,b ;c\nd") == [
        ("id", "a"),
        ("ws", ","),
        ("id", "b"),
        ("ws", " "),
        ("comment", ";c"),
        ("eol", "\n"),
        ("id", "d"),
    ]


def test_bracket_helpers() -> None:
    assert closing_bracket_for("#{") == "}"
    assert closing_bracket_for("'(") == ")"
    assert closing_bracket_for("[") == "]"
    assert is_map_opening("{")
    assert is_map_opening("^{")
    assert is_map_opening("#:ns{")
    assert not is_map_opening("#{")
    assert not is_map_opening("(")


def test_unmatched_text_raises_lexer_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lexer, "_TOKEN_PATTERN", re.compile(r"(?P<atom>a)"))

    with pytest.raises(LexerError) as excinfo:
        tokenize("ab")

    assert excinfo.value.position == 1
