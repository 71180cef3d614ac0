"""Command line utilities for inspecting ``key=value`` configuration files."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Iterable

import yaml

from .errors import ConfigurationError, ErrorKind
from .loader import load_config_file
from .parser import ConfigParser
from .settings import LoaderSettings

logger = logging.getLogger("kvconf")

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_DUPLICATE_INDEX = 2


class LevelRangeFilter(logging.Filter):
    """Pass records with ``low <= levelno < high``."""

    def __init__(self, low: int, high: int) -> None:
        super().__init__()
        self.low = low
        self.high = high

    def filter(self, record: logging.LogRecord) -> bool:
        return self.low <= record.levelno < self.high


def setup_logging(verbose: bool = False) -> None:
    """Send DEBUG to WARNING records to stdout and ERROR and above to stderr."""

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.handlers.clear()

    formatter = logging.Formatter("%(levelname)s - %(message)s")
    streams = (
        (sys.stdout, LevelRangeFilter(logging.NOTSET, logging.ERROR)),
        (sys.stderr, LevelRangeFilter(logging.ERROR, logging.CRITICAL + 1)),
    )
    for stream, level_filter in streams:
        handler = logging.StreamHandler(stream)
        handler.addFilter(level_filter)
        handler.setFormatter(formatter)
        root.addHandler(handler)


def _report_error(error: ConfigurationError) -> int:
    logger.error("%s", error)
    if error.kind is ErrorKind.DUPLICATE_INDEX:
        return EXIT_DUPLICATE_INDEX
    if getattr(error, "detail", None) is None:
        logger.error("Lines must be blank, start with '#', or contain exactly one '='")
    return EXIT_PARSE_ERROR


def _load(args: argparse.Namespace) -> ConfigParser:
    settings = LoaderSettings(encoding=args.encoding)
    return load_config_file(args.path, settings)


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def _json_value(value: object) -> object:
    # JSON has no token for non-finite numbers.
    if isinstance(value, float) and math.isinf(value):
        return _format_value(value)
    return value


def _check(args: argparse.Namespace) -> int:
    parser = _load(args)
    print(f"OK: {len(parser)} entries in {args.path}")
    return EXIT_OK


def _show(args: argparse.Namespace) -> int:
    parser = _load(args)
    data = parser.to_dict()

    if args.format == "json":
        safe = {key: _json_value(value) for key, value in data.items()}
        print(json.dumps(safe, indent=2, allow_nan=False))
    elif args.format == "yaml":
        print(yaml.safe_dump(data, sort_keys=False, default_flow_style=False), end="")
    else:
        for entry in parser.entries():
            print(f"{entry.key} = {_format_value(entry.value)} ({entry.value_type})")
    return EXIT_OK


def _get(args: argparse.Namespace) -> int:
    parser = _load(args)
    if args.key not in parser:
        logger.error("Key '%s' not found in %s", args.key, args.path)
        return EXIT_PARSE_ERROR
    print(_format_value(parser.get(args.key)))
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kvconf", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Encoding used to read configuration files (defaults to utf-8)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Validate a configuration file")
    check_parser.add_argument("path", type=Path, help="Configuration file")
    check_parser.set_defaults(func=_check)

    show_parser = subparsers.add_parser("show", help="Print every parsed entry")
    show_parser.add_argument("path", type=Path, help="Configuration file")
    show_parser.add_argument(
        "--format",
        choices=("text", "json", "yaml"),
        default="text",
        help="Output format (defaults to text)",
    )
    show_parser.set_defaults(func=_show)

    get_parser = subparsers.add_parser("get", help="Print the value of a single key")
    get_parser.add_argument("path", type=Path, help="Configuration file")
    get_parser.add_argument("key", help="Key to look up")
    get_parser.set_defaults(func=_get)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except ConfigurationError as e:
        return _report_error(e)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.error("Could not read %s: %s", args.path, e)
        return EXIT_PARSE_ERROR


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
