"""Pipeline runtime: tokenize once, then run every registered stage in order.

Each `process` call builds a fresh `IntentResult` that is owned by that call alone and handed from
stage to stage; stages either mutate it or return a replacement. Independent calls share no mutable
state and may run concurrently.
"""

from __future__ import annotations

import inspect
import logging
from pathlib import Path
from time import monotonic

from src.config.loader import load_config
from src.config.settings import Settings, load_settings
from src.intent.clean import clean
from src.intent.extractors import (
    extract_emails_only,
    extract_numbers_only,
    extract_phones_only,
    extract_urls_only,
)
from src.intent.normalize import make_normalize
from src.intent.schema import IntentResult
from src.intent.segment import segment
from src.intent.tokenizer import Tokenizer
from src.intent.types import Stage

logger = logging.getLogger(__name__)


class StageResultError(TypeError):
    """Raised when a stage returns something other than an `IntentResult`."""


def _stage_name(stage: Stage) -> str:
    return getattr(stage, "__name__", type(stage).__name__)


def _builtin_stages(settings: Settings, tokenizer: Tokenizer) -> list[Stage]:
    """Build the built-in stage list selected by `settings`.

    Order: normalize, clean, extraction (emails, phones, URLs, numbers), segment.
    """

    stages: list[Stage] = []
    if settings.pipeline.enable_normalization:
        # Words are folded in exactly one place: the tokenizer when it lowercases, else here.
        stages.append(make_normalize(fold_words=not tokenizer.lowercase))
    if settings.pipeline.enable_cleaning:
        stages.append(clean)

    if settings.pipeline.enable_extraction:
        extraction = settings.extraction
        if extraction.extract_emails:
            stages.append(extract_emails_only)
        if extraction.extract_phones:
            stages.append(extract_phones_only)
        if extraction.extract_urls:
            stages.append(extract_urls_only)
        if extraction.extract_numbers:
            stages.append(extract_numbers_only)

    if settings.pipeline.enable_segmentation:
        stages.append(segment)

    return stages


class Pipeline:
    """Ordered text-processing pipeline.

    Usage:
        pipeline = Pipeline()                       # built-in defaults (+ environment)
        pipeline.use(my_stage)                      # runs after the built-ins
        result = await pipeline.process("mail me at a@b.com")
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings if settings is not None else load_settings()
        self._tokenizer = Tokenizer(
            lowercase=self._settings.tokenizer.lowercase,
            merge_symbols=self._settings.tokenizer.merge_symbols,
        )
        self._stages: list[Stage] = _builtin_stages(self._settings, self._tokenizer)

    @classmethod
    def from_config_file(cls, config_path: str | Path | None = None) -> Pipeline:
        """Build a pipeline from the first config file found (see `src.config.loader`)."""

        return cls(load_config(config_path))

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def stages(self) -> tuple[Stage, ...]:
        """Registered stages in execution order."""

        return tuple(self._stages)

    def use(self, stage: Stage) -> Pipeline:
        """Append a stage (after everything already registered) and return the pipeline."""

        self._stages.append(stage)
        return self

    def add_custom_processor(self, stage: Stage) -> Pipeline:
        """Alias of `use`."""

        return self.use(stage)

    def get_config(self) -> Settings:
        """Return the effective settings this pipeline was built from."""

        return self._settings

    async def process(self, text: str) -> IntentResult:
        """Tokenize `text` and run it through every stage, one after another.

        A stage that raises aborts the call; its exception reaches the caller unchanged and no
        partial result is returned.

        Raises:
            StageResultError: If a stage returns something other than an `IntentResult`.
        """

        started = monotonic()
        result = IntentResult(text=text, tokens=self._tokenizer.tokenize(text))

        for stage in self._stages:
            outcome = stage(result)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if not isinstance(outcome, IntentResult):
                raise StageResultError(
                    f"stage {_stage_name(stage)} returned {type(outcome).__name__}, "
                    "expected IntentResult"
                )
            result = outcome

        latency_ms = int((monotonic() - started) * 1000)
        logger.debug(
            "processed tokens=%d entities=%d stages=%d latency_ms=%d",
            len(result.tokens),
            len(result.entities),
            len(self._stages),
            latency_ms,
        )
        return result
