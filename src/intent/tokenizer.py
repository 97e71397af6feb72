"""Character-level tokenizer.

A single left-to-right scan splits text into `word`, `number`, `punct` and `symbol` tokens.
Whitespace only separates tokens; every other character ends up inside exactly one token.
A `.` that is not a decimal point between two digits is sentence punctuation, so it becomes a
`punct` token and the clean stage drops it.
"""

from __future__ import annotations

from src.intent.schema import Token, TokenType

PUNCT_CHARS: frozenset[str] = frozenset(".,;:!?'\"()[]{}-`")


def is_digit(ch: str) -> bool:
    """ASCII digit test (`str.isdigit` also accepts superscripts and other scripts)."""

    return "0" <= ch <= "9"


def is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_symbol_char(ch: str) -> bool:
    return not (ch.isspace() or is_letter(ch) or is_digit(ch))


def _scan_word(text: str, i: int) -> int:
    # Digits are allowed once a letter has started the run (identifiers like "abc123").
    n = len(text)
    i += 1
    while i < n and (is_letter(text[i]) or is_digit(text[i])):
        i += 1
    return i


def _scan_number(text: str, i: int) -> int:
    n = len(text)
    has_decimal = False
    while i < n:
        ch = text[i]
        if is_digit(ch):
            i += 1
        elif ch == "." and not has_decimal and i + 1 < n and is_digit(text[i + 1]):
            # The run so far ends in a digit, so the point is flanked on both sides.
            has_decimal = True
            i += 1
        else:
            break
    return i


def _symbol_type(value: str) -> TokenType:
    if all(ch in PUNCT_CHARS for ch in value):
        return TokenType.punct
    return TokenType.symbol


class Tokenizer:
    """Split raw text into classified tokens.

    Options are fixed at construction:
        - `lowercase`: fold word tokens to lower case while scanning.
        - `merge_symbols`: emit a maximal run of adjacent punctuation/symbol characters as one
          token instead of one token per character.
    """

    __slots__ = ("_lowercase", "_merge_symbols")

    def __init__(self, *, lowercase: bool = False, merge_symbols: bool = False) -> None:
        self._lowercase = lowercase
        self._merge_symbols = merge_symbols

    @property
    def lowercase(self) -> bool:
        return self._lowercase

    @property
    def merge_symbols(self) -> bool:
        return self._merge_symbols

    def tokenize(self, text: str) -> list[Token]:
        """Scan `text` into tokens ordered by position. Empty or blank text yields `[]`."""

        tokens: list[Token] = []
        n = len(text)
        i = 0
        while i < n:
            ch = text[i]
            if ch.isspace():
                i += 1
                continue

            start = i
            if is_letter(ch):
                i = _scan_word(text, i)
                value = text[start:i]
                if self._lowercase:
                    value = value.lower()
                tokens.append(Token(type=TokenType.word, value=value, start=start, end=i))
                continue

            if is_digit(ch):
                i = _scan_number(text, i)
                tokens.append(Token(type=TokenType.number, value=text[start:i], start=start, end=i))
                continue

            i += 1
            if self._merge_symbols:
                while i < n and _is_symbol_char(text[i]):
                    i += 1
            value = text[start:i]
            tokens.append(Token(type=_symbol_type(value), value=value, start=start, end=i))

        return tokens
