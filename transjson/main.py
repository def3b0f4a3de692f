"""
transjson - command-line entry point.

Translates every string value of a JSON file and prints the result:

    transjson messages.json --target Spanish
    cat messages.json | transjson - --source English --target French --provider anthropic
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import uvicorn

from transjson.config import get_settings
from transjson.core.dispatcher import FailurePolicy
from transjson.core.errors import ParseError, TranslationError, ValidationError
from transjson.i18n.translator import LLMTranslator
from transjson.logging_utils import setup_logging
from transjson.services.translation import JsonTranslationRequest, TranslationService

logger = logging.getLogger(__name__)


EXIT_OK = 0
EXIT_VALIDATION = 2
EXIT_PARSE = 3
EXIT_TRANSLATION = 4


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="transjson",
        description="Translate every string value of a JSON document.",
    )
    parser.add_argument("input", help="JSON file to translate, or '-' for stdin")
    parser.add_argument("-t", "--target", required=True, help="Target language (e.g. Spanish)")
    parser.add_argument("-s", "--source", default="English", help="Source language (default: English)")
    parser.add_argument(
        "-p", "--provider",
        default=settings.llm_provider,
        help=f"Translation provider (default: {settings.llm_provider})",
    )
    parser.add_argument(
        "-c", "--max-concurrency",
        type=positive_int,
        default=settings.translation_max_concurrency,
        help="Maximum simultaneous translation calls",
    )
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Keep going when a string fails; untranslated strings keep their source text",
    )
    parser.add_argument("--compact", action="store_true", help="Write compact JSON without indentation")
    parser.add_argument("-o", "--output", help="Write the result here instead of stdout")
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


async def run(args: argparse.Namespace) -> int:
    policy = FailurePolicy.PARTIAL if args.partial else FailurePolicy.FAIL_FAST
    service = TranslationService(
        LLMTranslator(),
        max_concurrency=args.max_concurrency,
        policy=policy,
        indent=None if args.compact else 2,
    )
    try:
        document = read_input(args.input)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return EXIT_VALIDATION

    request = JsonTranslationRequest(
        document=document,
        source_language=args.source,
        target_language=args.target,
        provider=args.provider,
    )

    try:
        response = await service.translate_json(request)
    except ValidationError as e:
        logger.error("Invalid request: %s", e)
        return EXIT_VALIDATION
    except ParseError as e:
        logger.error("Invalid JSON: %s", e)
        return EXIT_PARSE
    except TranslationError as e:
        logger.error("Translation failed at %s: %s", e.pointer, e)
        return EXIT_TRANSLATION

    for failure in response.failures or []:
        logger.warning("Not translated: %s (%s)", failure["pointer"], failure["error"])

    if args.output:
        Path(args.output).write_text(response.translated_json + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(response.translated_json + "\n")
    return EXIT_OK


def serve() -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "transjson.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, get_settings().log_file or None)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
