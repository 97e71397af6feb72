"""Cleaning stage: drop punctuation tokens."""

from __future__ import annotations

from src.intent.schema import IntentResult, TokenType


def clean(result: IntentResult) -> IntentResult:
    """Remove every `punct` token, keeping the order of the rest. Entities are not touched."""

    result.tokens = [token for token in result.tokens if token.type != TokenType.punct]
    return result
