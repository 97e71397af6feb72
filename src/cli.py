"""Command-line entry point: process text and print the resulting record as JSON.

Usage:
    python -m src.cli "Call 555-123-4567 or mail john@example.com."
    echo "visit http://example.com/path now" | python -m src.cli --config miniparse.config.yaml
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from src.config.logging import configure_logging
from src.intent.pipeline import Pipeline

logger = logging.getLogger(__name__)


async def run(text: str, *, config_path: str | None) -> dict:
    """Process `text` with a pipeline built from the config loader and return plain JSON data."""

    pipeline = Pipeline.from_config_file(config_path)
    result = await pipeline.process(text)
    return result.model_dump(mode="json")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""

    parser = argparse.ArgumentParser(
        prog="miniparse",
        description="Tokenize text and extract emails, phone numbers, URLs and numbers.",
    )
    parser.add_argument("text", nargs="*", help="Text to process (read from stdin when omitted).")
    parser.add_argument("--config", default=None, help="Path to a YAML config file.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or WARNING).")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output.")
    args = parser.parse_args(argv)

    load_dotenv(".env")
    configure_logging(args.log_level)

    text = " ".join(args.text) if args.text else sys.stdin.read()
    output = asyncio.run(run(text, config_path=args.config))
    logger.info("processed chars=%d entities=%d", len(text), len(output["entities"]))

    json.dump(output, sys.stdout, ensure_ascii=False, indent=2 if args.pretty else None)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
