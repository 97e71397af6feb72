"""Tests for the character-level tokenizer."""

from __future__ import annotations

import pytest

from src.intent.schema import Token, TokenType
from src.intent.tokenizer import Tokenizer


def _pairs(tokens: list[Token]) -> list[tuple[str, str]]:
    return [(str(t.type), t.value) for t in tokens]


@pytest.mark.parametrize("text", ["", " ", "  \t\n  "])
def test_empty_and_blank_text_yield_no_tokens(text: str) -> None:
    assert Tokenizer().tokenize(text) == []


def test_basic_classification() -> None:
    tokens = Tokenizer().tokenize("Order 3 apples, now!")
    assert _pairs(tokens) == [
        ("word", "Order"),
        ("number", "3"),
        ("word", "apples"),
        ("punct", ","),
        ("word", "now"),
        ("punct", "!"),
    ]


def test_word_allows_digits_after_first_letter() -> None:
    tokens = Tokenizer().tokenize("abc123 123abc")
    assert _pairs(tokens) == [("word", "abc123"), ("number", "123"), ("word", "abc")]


def test_decimal_point_between_digits_joins_number() -> None:
    tokens = Tokenizer().tokenize("pi is 3.14.")
    assert _pairs(tokens) == [
        ("word", "pi"),
        ("word", "is"),
        ("number", "3.14"),
        ("punct", "."),
    ]


def test_only_one_decimal_point_per_number() -> None:
    tokens = Tokenizer().tokenize("1.2.3")
    assert _pairs(tokens) == [("number", "1.2"), ("punct", "."), ("number", "3")]


@pytest.mark.parametrize("text", [".5", "5.", "a . b"])
def test_lone_decimal_point_is_not_a_number(text: str) -> None:
    tokens = Tokenizer().tokenize(text)
    assert ("punct", ".") in _pairs(tokens)
    assert all("." not in t.value for t in tokens if t.type == TokenType.number)


def test_symbols_one_per_character_by_default() -> None:
    tokens = Tokenizer().tokenize("a+=b")
    assert _pairs(tokens) == [("word", "a"), ("symbol", "+"), ("symbol", "="), ("word", "b")]


def test_merge_symbols_merges_adjacent_runs() -> None:
    tokens = Tokenizer(merge_symbols=True).tokenize("wait?! a+=b ...")
    assert _pairs(tokens) == [
        ("word", "wait"),
        ("punct", "?!"),
        ("word", "a"),
        ("symbol", "+="),
        ("word", "b"),
        ("punct", "..."),
    ]


def test_merged_run_with_any_symbol_is_a_symbol() -> None:
    tokens = Tokenizer(merge_symbols=True).tokenize("x.@y")
    assert _pairs(tokens) == [("word", "x"), ("symbol", ".@"), ("word", "y")]


def test_non_ascii_characters_are_kept_as_symbols() -> None:
    tokens = Tokenizer().tokenize("café")
    assert _pairs(tokens) == [("word", "caf"), ("symbol", "é")]


def test_lowercase_folds_words_only() -> None:
    tokens = Tokenizer(lowercase=True).tokenize("Hello WORLD 42")
    assert _pairs(tokens) == [("word", "hello"), ("word", "world"), ("number", "42")]
    assert (tokens[0].start, tokens[0].end) == (0, 5)


@pytest.mark.parametrize("merge_symbols", [False, True])
@pytest.mark.parametrize(
    "text",
    [
        "contact me at john.doe@example.com please",
        "  Call (555) 123-4567, or +1.800.555.0199!!  ",
        "visit http://example.com/path?q=1 now... 3.5% off",
        "tabs\tand\nnewlines\r\n#hashtag $9.99 ~~~",
    ],
)
def test_spans_partition_the_text(text: str, merge_symbols: bool) -> None:
    tokens = Tokenizer(merge_symbols=merge_symbols).tokenize(text)

    previous_end = 0
    rebuilt: list[str] = []
    for token in tokens:
        assert 0 <= previous_end <= token.start < token.end <= len(text)
        assert token.value == text[token.start:token.end]
        gap = text[previous_end:token.start]
        assert gap.strip() == ""
        rebuilt.append(gap)
        rebuilt.append(token.value)
        previous_end = token.end
    rebuilt.append(text[previous_end:])

    assert "".join(rebuilt) == text


def test_settings_are_read_only() -> None:
    tokenizer = Tokenizer(lowercase=True, merge_symbols=True)
    assert tokenizer.lowercase is True
    assert tokenizer.merge_symbols is True
    with pytest.raises(AttributeError):
        tokenizer.lowercase = False  # type: ignore[misc]
