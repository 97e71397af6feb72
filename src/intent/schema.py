"""Intent record schema (Pydantic models).

These models are the contract between the tokenizer, the extraction/normalization stages and the
caller of `Pipeline.process`. Span offsets always index into the original input text.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TokenType(StrEnum):
    """Lexical classes produced by the tokenizer."""

    word = "word"
    number = "number"
    punct = "punct"
    symbol = "symbol"


class EntityType(StrEnum):
    """Structured entity kinds located by the extractors."""

    email = "email"
    phone = "phone"
    url = "url"
    number = "number"


class _Span(BaseModel):
    """A `[start, end)` character span over the original text."""

    model_config = ConfigDict(extra="forbid")

    start: int = Field(ge=0)
    end: int

    @model_validator(mode="after")
    def validate_span(self) -> _Span:
        """Validate that the span is non-empty (`start < end`)."""

        if self.start >= self.end:
            raise ValueError("start must be < end")
        return self


class Token(_Span):
    """A classified lexical unit.

    The position is fixed once scanned; `value` may be rewritten in place by normalization.
    """

    type: TokenType
    value: str


class Entity(_Span):
    """A structured fact (email, phone, URL, number) located in the original text."""

    type: EntityType
    value: str


class Segment(_Span):
    """A sentence-like slice of the original text."""

    text: str


class IntentResult(BaseModel):
    """The single record threaded through every pipeline stage.

    `text` is never modified by stages; extractors always scan it rather than token values.
    """

    model_config = ConfigDict(extra="forbid")

    text: str
    tokens: list[Token] = Field(default_factory=list)
    entities: list[Entity] = Field(default_factory=list)
    segments: list[Segment] = Field(default_factory=list)
