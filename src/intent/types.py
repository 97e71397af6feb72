"""Shared typing helpers for pipeline stages."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeAlias

from src.intent.schema import IntentResult

# A stage may be a plain function or a coroutine function; either way it returns the record.
Stage: TypeAlias = Callable[[IntentResult], IntentResult | Awaitable[IntentResult]]
