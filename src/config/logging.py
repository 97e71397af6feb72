"""Logging configuration for the command-line entry point."""

from __future__ import annotations

import logging
import os


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    The level comes from `level`, then the `LOG_LEVEL` environment variable, then `WARNING`, so the
    JSON written to stdout is never interleaved with diagnostics unless asked for. Logs go to
    stderr.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
