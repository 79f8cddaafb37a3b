#!/usr/bin/env python3
"""
Translate a range of novel chapters from the command line, or serve the API.

Usage:
    chapter-translator translate --input https://example.com/novel.json --range 3-7
    chapter-translator translate --input novel.json --model gemini-2.5-pro --delay 6000
    chapter-translator serve --port 8000

The API key defaults to the GEMINI_API_KEY environment variable (or .env).
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from chapter_translator.config import settings
from chapter_translator.core.errors import ChapterTranslatorError
from chapter_translator.core.io import OutputWriter
from chapter_translator.core.translation.orchestrator import (
    BatchConfig,
    BatchOrchestrator,
    BatchStage,
)

logger = logging.getLogger("chapter_translator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chapter-translator",
        description="Translate Chinese novel chapters to English with Gemini and Google Translate fallback",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    translate = subparsers.add_parser("translate", help="Translate a batch of chapters")
    translate.add_argument("--input", required=True, help="URL or path of the chapter JSON array")
    translate.add_argument("--range", default="", help='Chapter range, e.g. "3-7" (default: all)')
    translate.add_argument("--api-key", default=None, help="Gemini API key (default: GEMINI_API_KEY)")
    translate.add_argument("--model", default=settings.default_model, help="Model for chapter bodies")
    translate.add_argument("--title-model", default=settings.default_title_model, help="Model for titles")
    translate.add_argument(
        "--delay",
        default=str(settings.default_delay_ms),
        help="Pause after each chapter in milliseconds (default: %(default)s)",
    )
    translate.add_argument(
        "--output-dir", type=Path, default=settings.output_dir, help="Directory for the JSON output"
    )
    translate.add_argument(
        "--isolate-failures",
        action="store_true",
        help="Keep going when both backends fail for a chapter (leaves it empty)",
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    return parser


def _print_progress(completed: int, total: int):
    print(f"Progress: {completed}/{total}", file=sys.stderr)


async def run_translate(args: argparse.Namespace) -> int:
    config = BatchConfig(
        input_source=args.input,
        range_spec=args.range,
        api_key=args.api_key,
        model=args.model,
        title_model=args.title_model,
        delay_ms=args.delay,
        isolate_item_failures=args.isolate_failures,
    )
    if not config.api_key:
        logger.warning("No API key given; every chapter will go through Google Translate")

    try:
        orchestrator = BatchOrchestrator.from_config(
            config,
            writer=OutputWriter(args.output_dir),
            on_progress=_print_progress,
        )
        state = await orchestrator.run()
    except (ChapterTranslatorError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if state.stage is BatchStage.DONE and state.output_path is not None:
        print(state.output_path)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        import uvicorn

        uvicorn.run("chapter_translator.main:app", host=args.host, port=args.port)
        return 0

    try:
        return asyncio.run(run_translate(args))
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
