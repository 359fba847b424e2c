"""Command-line entry point.

Usage:
    tallymark resolve dist/            # full pass over a finished build
    tallymark resolve dist/ --strict   # fail on unmatched deferred anchors
    tallymark watch                    # dev mode: placeholders stay as-is
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence

from tallymark.config import get_config
from tallymark.errors import TallymarkError
from tallymark.integration import DeferredFootnotesIntegration
from tallymark.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tallymark",
        description="Resolve deferred footnote numbers in generated HTML",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every fixed anchor")
    sub = parser.add_subparsers(dest="command", required=True)

    resolve = sub.add_parser("resolve", help="Run the full rewrite pass over an output directory")
    resolve.add_argument("output_dir", help="Root of the generated site")
    resolve.add_argument("--strict", action="store_true", help="Fail on unmatched deferred anchors")
    resolve.add_argument("--suffix", default=None, help="Output file suffix (default: .html)")

    watch = sub.add_parser("watch", help="Dev mode; deferred footnotes are not resolved")
    watch.add_argument("--address", default=None, help="Dev server address, for the log line")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(args.verbose)

    if args.command == "watch":
        DeferredFootnotesIntegration().server_start(args.address)
        return 0

    base = get_config()
    config = dataclasses.replace(
        base,
        output_suffix=args.suffix or base.output_suffix,
        strict=args.strict or base.strict,
    )
    try:
        report = DeferredFootnotesIntegration(config).build_done(args.output_dir)
    except (TallymarkError, OSError) as e:
        logger.error("%s", e)
        return 1

    if report.unresolved:
        logger.warning("%d files still contain unresolved deferred footnotes", len(report.unresolved))
    return 0


if __name__ == "__main__":
    sys.exit(main())
