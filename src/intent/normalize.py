"""Normalization stage: case-folding and numeric canonicalization."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from src.intent.schema import IntentResult, TokenType
from src.intent.types import Stage


def canonical_number(value: str) -> str:
    """Return the canonical decimal form of a numeric string.

    Normalization is intentionally lossy and idempotent:
        - Integral values lose their fractional part (`"3.0"` -> `"3"`, `"007"` -> `"7"`).
        - Other values drop trailing zeros (`"12.50"` -> `"12.5"`).
        - Positional notation only, never an exponent.
        - Digits are kept exactly; nothing is rounded to a context precision.

    Text that does not parse as a finite number is returned unchanged.
    """

    try:
        number = Decimal(value)
    except InvalidOperation:
        return value
    if not number.is_finite():
        return value

    # Built from the digit tuple: `int()` caps string conversion and `normalize()` rounds.
    sign, digit_tuple, exponent = number.as_tuple()
    digits = "".join(map(str, digit_tuple))
    if exponent >= 0:
        whole, fraction = digits + "0" * exponent, ""
    else:
        places = -exponent
        digits = digits.rjust(places + 1, "0")
        whole, fraction = digits[:-places], digits[-places:]

    canonical = whole.lstrip("0") or "0"
    fraction = fraction.rstrip("0")
    if fraction:
        canonical = f"{canonical}.{fraction}"
    if sign and canonical != "0":
        canonical = f"-{canonical}"
    return canonical


def make_normalize(*, fold_words: bool = True) -> Stage:
    """Build a normalize stage.

    `fold_words=False` leaves word tokens alone, for pipelines whose tokenizer already folds them.
    """

    def normalize_stage(result: IntentResult) -> IntentResult:
        for token in result.tokens:
            if token.type == TokenType.word:
                if fold_words:
                    token.value = token.value.lower()
            elif token.type == TokenType.number:
                token.value = canonical_number(token.value)

        for entity in result.entities:
            entity.value = entity.value.lower()

        return result

    normalize_stage.__name__ = "normalize" if fold_words else "normalize_numbers"
    return normalize_stage


normalize: Stage = make_normalize()
