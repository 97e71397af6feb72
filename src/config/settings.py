"""Typed pipeline settings.

Every field has a default, so `Settings()` is always a complete configuration. Values can be
overridden through environment variables (optionally via a local `.env` file), e.g.
`MINIPARSE_TOKENIZER__MERGE_SYMBOLS=true`, and through a YAML config file (see
`src.config.loader`).

Sections accept the camelCase keys used in YAML files (`mergeSymbols`) as well as the snake_case
attribute names (`merge_symbols`).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Section(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TokenizerSettings(_Section):
    """Tokenizer options, fixed for the lifetime of a tokenizer."""

    lowercase: bool = True
    merge_symbols: bool = False


class PipelineSettings(_Section):
    """Which groups of built-in stages a pipeline registers."""

    enable_normalization: bool = True
    enable_cleaning: bool = True
    enable_extraction: bool = True
    enable_segmentation: bool = False


class ExtractionSettings(_Section):
    """Per-type extractor switches (only consulted when extraction is enabled)."""

    extract_emails: bool = True
    extract_phones: bool = True
    extract_urls: bool = True
    extract_numbers: bool = True


SECTION_NAMES: tuple[str, ...] = ("tokenizer", "pipeline", "extraction")


class Settings(BaseSettings):
    """Complete, read-only pipeline configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MINIPARSE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    tokenizer: TokenizerSettings = Field(default_factory=TokenizerSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)


def load_settings() -> Settings:
    """Load settings from defaults and environment variables.

    Raises:
        RuntimeError: If an environment override is present but invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
