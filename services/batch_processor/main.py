"""
Batch Processor - Main Entry Point

Command-line interface for the batch processor. Reads a JSON input file,
transforms every item and writes a JSON report with one record per item.

Usage:
    python -m services.batch_processor.main [OPTIONS]

Options:
    --input, -i PATH      Input JSON file (default: settings, then data/input.sample.json)
    --output, -o PATH     Output JSON file (default: settings, then data/output.sample.json)
    --config PATH         Path to settings.yml (default: config/settings.yml)
    --log-level LEVEL     One of silent, error, info, debug (overrides settings)
    --verbose             Shorthand for --log-level debug
    --help                Show this message and exit

Unrecognized flags (``--name value``, ``--name=value``, ``-n value`` or a bare
``--name``) are accepted and collected without validation.

Examples:
    # Process the sample input with configured defaults:
    python -m services.batch_processor.main

    # Process a specific file with debug logging:
    python -m services.batch_processor.main -i items.json -o out/report.json --verbose

Exit Codes:
    0: Success (including empty input and per-item failures)
    1: Fatal error (input could not be loaded, output could not be written,
       configuration could not be read)
"""

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import load_dotenv

from .config_loader import (
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_PATH,
    BatchConfig,
    ConfigError,
    load_batch_config,
)
from .formatter import ProcessedRecord, format_result
from .input_parser import InputError, parse_input_file
from .item_processor import ItemResult, process_item
from .logging_config import LOGGER_NAME, configure_logging, log_exception
from .output_writer import WriteError, write_output_file

# Load environment variables
load_dotenv()

# Named explicitly so the logger stays under the package when run with -m
logger = logging.getLogger(f"{LOGGER_NAME}.main")

ExtraFlags = dict[str, Union[str, bool]]
ItemProcessor = Callable[[Any, int], ItemResult]


def collect_extra_flags(tokens: Sequence[str]) -> ExtraFlags:
    """
    Collect flags argparse did not recognize into a mapping.

    ``--key=value`` and ``--key value`` store strings, ``-k value`` stores a
    string under the short key, and a flag not followed by a value stores
    True. Tokens that are not flags are ignored.
    """
    extras: ExtraFlags = {}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        has_value = i + 1 < len(tokens) and not tokens[i + 1].startswith("-")

        if token.startswith("--"):
            key, sep, value = token[2:].partition("=")
            if sep:
                extras[key] = value
            elif has_value:
                extras[key] = tokens[i + 1]
                i += 1
            else:
                extras[key] = True
        elif token.startswith("-") and len(token) > 1:
            key = token[1:]
            if has_value:
                extras[key] = tokens[i + 1]
                i += 1
            else:
                extras[key] = True
        i += 1
    return extras


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list without the program name. Defaults to sys.argv[1:].

    Returns:
        Parsed arguments namespace. Unrecognized flags are available as
        ``args.extras``.
    """
    parser = argparse.ArgumentParser(
        description='Transform a JSON list of items and write a JSON report',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
        allow_abbrev=False,
    )

    # nargs='?' so a bare --input falls back to the configured default
    parser.add_argument(
        '--input', '-i',
        nargs='?',
        const=None,
        default=None,
        help='Input JSON file'
    )

    parser.add_argument(
        '--output', '-o',
        nargs='?',
        const=None,
        default=None,
        help='Output JSON file'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to settings.yml configuration file (default: config/settings.yml)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        dest='log_level',
        help='Log level: silent, error, info or debug (default: from settings)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args, unknown = parser.parse_known_args(argv)
    args.extras = collect_extra_flags(unknown)
    return args


def resolve_paths(args: argparse.Namespace, config: BatchConfig) -> tuple[str, str]:
    """Pick input/output paths: CLI flag, then configured default, then built-in fallback."""
    input_path = args.input or config.default_input_path or DEFAULT_INPUT_PATH
    output_path = args.output or config.default_output_path or DEFAULT_OUTPUT_PATH
    return input_path, output_path


def effective_log_level(args: argparse.Namespace, config: Optional[BatchConfig]) -> Optional[str]:
    if args.verbose:
        return 'debug'
    if args.log_level:
        return args.log_level
    return config.log_level if config else None


def describe_runtime_context() -> str:
    """Return a human-readable description of where the processor is running from."""
    script_path = sys.argv[0] if sys.argv and sys.argv[0] else __file__
    return f"Running at {Path(script_path).resolve()}"


def process_items(
    items: Sequence[Any],
    processor: Optional[ItemProcessor] = None,
) -> list[ProcessedRecord]:
    """
    Process every item in order, isolating per-item failures.

    A failing item produces a record with ``result=None`` and an error
    description in ``logs``; the remaining items are still processed.

    Args:
        items: Normalized input items
        processor: Callable taking (item, index) and returning ItemResult.
            Defaults to process_item.

    Returns:
        One ProcessedRecord per item, in input order
    """
    processor = processor or process_item
    records: list[ProcessedRecord] = []

    for index, raw_input in enumerate(items):
        try:
            outcome = processor(raw_input, index)
            records.append(format_result(raw_input, outcome.result, outcome.logs))
        except Exception as e:
            log_exception(logger, e)
            # Keep an error record so downstream consumers see the failure
            records.append(
                format_result(raw_input, None, f"Error processing item #{index + 1}: {e}")
            )

    return records


def run_batch(
    input_path: str,
    output_path: str,
    processor: Optional[ItemProcessor] = None,
) -> dict[str, int]:
    """
    Main batch logic.

    Args:
        input_path: Input JSON file
        output_path: Output JSON file
        processor: Per-item transformation (injectable for tests)

    Returns:
        Dictionary with statistics:
        - loaded: Number of items read from the input
        - processed: Number of records written
        - failed: Number of items whose processing raised

    Raises:
        InputError: If the input file cannot be loaded (nothing is written)
        WriteError: If the output file cannot be written
    """
    stats = {
        'loaded': 0,
        'processed': 0,
        'failed': 0,
    }

    items = parse_input_file(input_path)
    stats['loaded'] = len(items)

    if not items:
        logger.info("No input items found. Nothing to process.")
        write_output_file(output_path, [])
        return stats

    records = process_items(items, processor)
    stats['processed'] = len(records)
    stats['failed'] = sum(1 for record in records if record.result is None)

    write_output_file(output_path, [record.to_dict() for record in records])
    logger.info(f"Processing complete. Items processed: {len(records)}.")

    if stats['failed']:
        logger.debug(f"{stats['failed']} item(s) failed and were recorded with a null result")

    return stats


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the batch processor.

    Returns:
        Exit code (0 = success, 1 = fatal error)
    """
    args = parse_args(argv)

    try:
        config = load_batch_config(args.config)
    except ConfigError as e:
        configure_logging(effective_log_level(args, None))
        log_exception(logger, e)
        return 1

    configure_logging(effective_log_level(args, config))
    input_path, output_path = resolve_paths(args, config)

    logger.info("Batch processor starting up.")
    logger.debug(describe_runtime_context())
    logger.info(f"Using input: {input_path}")
    logger.info(f"Using output: {output_path}")
    if args.extras:
        logger.debug(f"Ignoring unrecognized flags: {args.extras}")

    try:
        run_batch(input_path, output_path)
    except (InputError, WriteError) as e:
        log_exception(logger, e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
