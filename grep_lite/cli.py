from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Optional

from grep_lite import __version__
from grep_lite.colors import ANSI_CYAN, ANSI_RED, color_enabled_for, colorize
from grep_lite.inputs import StreamSource, open_source, read_lines, resolve_inputs
from grep_lite.logs import setup_logging
from grep_lite.matcher import Matcher, PatternError, compile_matcher
from grep_lite.scanner import ScanConfig, scan_stream


@dataclass
class Stats:
    streams_seen: int = 0
    streams_read: int = 0
    read_errors: int = 0
    lines_seen: int = 0
    lines_reported: int = 0
    elapsed_s: float = 0.0


def non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="grep-lite",
        description="Searches for patterns in files, directories or standard input.",
    )
    p.add_argument("pattern", help="Regular expression pattern (Python re).")
    p.add_argument("inputs", nargs="*", help="Files or folders to search (default: standard input).")

    p.add_argument("-i", "--ignore-case", action="store_true", help="Case-insensitive search.")
    p.add_argument("-v", "--invert-match", dest="invert", action="store_true", help="Select non-matching lines.")
    p.add_argument("-c", "--count", action="store_true", help="Print the number of selected lines per input.")
    p.add_argument("-r", "--recursive", action="store_true", help="Recurse into folders.")
    p.add_argument("-A", "--after", type=non_negative_int, default=0, metavar="N",
                   help="Print N lines of context after each match.")
    p.add_argument("-B", "--before", type=non_negative_int, default=0, metavar="N",
                   help="Print N lines of context before each match.")
    p.add_argument("-C", "--context", type=non_negative_int, default=0, metavar="N",
                   help="Print N lines of context around each match (overrides -A/-B).")

    p.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Highlight matches (default: auto).",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging (more verbose log file).")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

    return p


def search_source(
    source: StreamSource,
    matcher: Matcher,
    config: ScanConfig,
    logger: logging.Logger,
    stats: Stats,
) -> None:
    stats.streams_seen += 1
    try:
        f = open_source(source)
    except OSError as ex:
        logger.error("Cannot read '%s': %s", source.name, ex)
        return

    stats.streams_read += 1
    logger.debug("Scanning %s", source.name)
    try:
        result = scan_stream(read_lines(f, source.name), source.name, matcher, config)
    finally:
        if not source.is_stdin:
            f.close()

    stats.lines_seen += result.lines_seen
    # count mode prints one summary per stream
    stats.lines_reported += 1 if config.count else result.emitted
    if result.error is not None:
        stats.read_errors += 1


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger, log_path = setup_logging(args.debug)
    color_enabled = color_enabled_for(args.color, sys.stdout)

    logger.info("Args: %s", " ".join(sys.argv if argv is None else argv))
    logger.info("Options: recursive=%s ignore_case=%s invert=%s count=%s before=%d after=%d context=%d color=%s debug=%s",
                args.recursive, args.ignore_case, args.invert, args.count,
                args.before, args.after, args.context, args.color, args.debug)

    stats = Stats()
    t0 = time.perf_counter()

    try:
        try:
            matcher = compile_matcher(args.pattern, ignore_case=args.ignore_case, invert=args.invert)
        except PatternError as ex:
            logger.error("%s", ex)
            print(colorize(str(ex), ANSI_RED, color_enabled), file=sys.stderr)
            return 2

        sources = resolve_inputs(args.inputs, recursive=args.recursive, exclude=[log_path])
        config = ScanConfig.from_counts(
            before=args.before,
            after=args.after,
            context=args.context,
            count=args.count,
            color=color_enabled,
            label=len(sources) > 1,
        )
        logger.debug("Resolved %d input(s); before=%d after=%d label=%s",
                     len(sources), config.before, config.after, config.label)

        for source in sources:
            search_source(source, matcher, config, logger, stats)

        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C).")
        print(colorize("Interrupted.", ANSI_RED, color_enabled), file=sys.stderr)
        return 130

    finally:
        stats.elapsed_s = time.perf_counter() - t0

        logger.info(
            "Performance: streams_seen=%d streams_read=%d read_errors=%d lines_seen=%d lines_reported=%d elapsed=%.6fs",
            stats.streams_seen,
            stats.streams_read,
            stats.read_errors,
            stats.lines_seen,
            stats.lines_reported,
            stats.elapsed_s,
        )

        # stderr, so piping output still works
        print(colorize(f"Log written to: {log_path}", ANSI_CYAN, color_enabled), file=sys.stderr)


def run() -> None:
    raise SystemExit(main())
