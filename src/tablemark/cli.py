"""
CLI interface for tablemark.

Pipe-friendly converter: delimited tabular text in, indented html table out.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .config import get_config
from .formats import csv as _csv  # noqa: F401 - ensure csv/tsv formats are registered
from .formats.base import FormatStrategy, MalformedInputError, registry
from .table import convert


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tablemark",
        description="Render CSV/TSV records as an indented html table",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--type",
        type=str,
        dest="format_type",
        help="Force format type (e.g., csv, tsv)",
    )

    parser.add_argument(
        "--table-only",
        action="store_true",
        help="Print only the table element, without the html document around it",
    )

    parser.add_argument(
        "--no-style",
        action="store_true",
        help="Omit the stylesheet from the document head",
    )

    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Accept records whose field count differs from the header",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug information to stderr",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> tuple[str, str | None]:
    """Read from file or stdin, return (content, filename)."""
    if filepath:
        cfg = get_config()
        file_size = os.path.getsize(filepath)
        if file_size > cfg.io.max_file_size:
            raise ValueError(
                f"File too large: {file_size:,} bytes (max_file_size is {cfg.io.max_file_size:,})"
            )
        with open(filepath, encoding=cfg.io.encoding, newline="") as f:
            return f.read(), filepath

    return sys.stdin.read(), None


def get_strategy(
    content: str,
    filename: str | None,
    force_type: str | None,
) -> FormatStrategy:
    """Get format strategy via override, detection, or fallback to the default format."""
    if force_type:
        strategy = registry.get_by_name(force_type) or registry.get_by_extension(force_type)
        if strategy:
            return strategy
        raise ValueError(f"Unknown format type: {force_type}")

    match = registry.detect(content, filename)
    if match:
        return match.strategy

    fallback = registry.get_by_name(get_config().reader.default_format)
    if fallback:
        return fallback

    raise RuntimeError("No format strategy available")


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr at the configured level."""
    level = logging.DEBUG
    if not verbose:
        level = logging.getLevelName(get_config().logging.level)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    setup_logging(parsed.verbose)
    cfg = get_config()

    try:
        content, filename = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        strategy = get_strategy(content, filename, parsed.format_type)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    style = None if parsed.no_style or not cfg.document.include_style else cfg.document.style

    try:
        output = convert(
            content,
            strategy,
            strict=cfg.reader.strict and not parsed.lenient,
            document=cfg.document.wrap_document and not parsed.table_only,
            style=style,
        )
    except MalformedInputError as e:
        print(f"Error: malformed {strategy.name} input: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
