"""CLI entrypoint for tagcount."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import replace
from pathlib import Path

from .config import load_config
from .errors import ConfigError, ResolutionError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _positive_float(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}") from exc
    if not math.isfinite(seconds) or seconds <= 0:
        raise argparse.ArgumentTypeError("timeout must be a positive, finite number of seconds")
    return seconds


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagcount",
        description="Count Go struct declarations and how many of them use field tags.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .tagcount.yml or the directory containing it (defaults to current directory).",
    )
    parser.add_argument(
        "--go",
        dest="go_binary",
        default=None,
        help="Go command used for `go list` and `go env` (overrides config).",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds to wait for `go list` before giving up (overrides config).",
    )
    parser.add_argument(
        "packages",
        nargs="*",
        help="Package patterns understood by `go list`, e.g. ./... or net/http.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tagcount."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    go = config.go
    if args.go_binary:
        go = replace(go, binary=args.go_binary)
    if args.timeout is not None:
        go = replace(go, timeout=args.timeout)
    config = replace(config, go=go)

    orchestrator = Orchestrator.from_config(config)
    try:
        counts = orchestrator.run(args.packages)
    except ResolutionError as exc:
        parser.exit(1, f"{exc}\n")

    print("Tagged", counts.tagged)
    print("Total", counts.total)


if __name__ == "__main__":
    main(sys.argv[1:])
