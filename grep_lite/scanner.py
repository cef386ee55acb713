from __future__ import annotations

import logging
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple, Optional, TextIO

from grep_lite.colors import ANSI_DIM, colorize, highlight_spans
from grep_lite.inputs import StreamReadError
from grep_lite.matcher import Matcher

logger = logging.getLogger("grep_lite")


class LineRecord(NamedTuple):
    lineno: int
    text: str


@dataclass(frozen=True)
class ScanConfig:
    before: int = 0
    after: int = 0
    count: bool = False
    color: bool = False
    label: bool = False

    @classmethod
    def from_counts(cls, before: int = 0, after: int = 0, context: int = 0, **kwargs) -> "ScanConfig":
        """A positive `context` replaces both `before` and `after`."""
        if context > 0:
            before = after = context
        if before < 0 or after < 0:
            raise ValueError("context sizes must be non-negative")
        return cls(before=before, after=after, **kwargs)


@dataclass
class ScanState:
    """Mutable state for one stream; created per scan, never shared."""

    before: deque
    after_left: int = 0
    emitted: int = 0
    lines_seen: int = 0

    @classmethod
    def new(cls, config: ScanConfig) -> "ScanState":
        return cls(before=deque(maxlen=config.before))


@dataclass
class ScanResult:
    lines_seen: int = 0
    emitted: int = 0
    error: Optional[StreamReadError] = field(default=None)


# ----------------------------
# Formatting
# ----------------------------
def format_line(
    record: LineRecord,
    name: str,
    config: ScanConfig,
    matcher: Matcher,
    is_match: bool,
) -> str:
    text = record.text
    if is_match and not matcher.invert:
        text = highlight_spans(text, matcher.spans(text), enabled=config.color)

    prefix = f"{name}:{record.lineno}:" if config.label else f"{record.lineno}:"
    return f"{colorize(prefix, ANSI_DIM, config.color)} {text}"


def format_count(count: int, name: str, config: ScanConfig) -> str:
    return f"{name}: {count}" if config.label else f"{count}"


# ----------------------------
# Scan loop
# ----------------------------
def scan_stream(
    lines: Iterable[str],
    name: str,
    matcher: Matcher,
    config: ScanConfig,
    out: Optional[TextIO] = None,
) -> ScanResult:
    """
    Scan one stream and write its output (or its count summary) to `out`.

    Before-context is held in a bounded buffer and only written when a later
    line matches; lines still buffered at end of stream are dropped. A line
    still covered by the previous match's after-context is emitted as such
    and never re-enters the buffer.
    """
    out = out if out is not None else sys.stdout
    state = ScanState.new(config)
    result = ScanResult()

    def emit(record: LineRecord, is_match: bool) -> None:
        state.emitted += 1
        if not config.count:
            print(format_line(record, name, config, matcher, is_match), file=out)

    try:
        for lineno, text in enumerate(lines, start=1):
            state.lines_seen = lineno
            record = LineRecord(lineno, text)

            if matcher.is_match(text):
                while state.before:
                    emit(state.before.popleft(), is_match=False)
                emit(record, is_match=True)
                state.after_left = config.after
            elif state.after_left > 0:
                emit(record, is_match=False)
                state.after_left -= 1
            else:
                state.before.append(record)
    except StreamReadError as ex:
        print(f"{name}: Error reading file '{ex}'", file=out)
        logger.error("Read error in '%s' after line %d: %s", name, state.lines_seen, ex.cause)
        result.error = ex

    if state.before:
        logger.debug("Dropping %d unflushed before-context line(s) in %s", len(state.before), name)

    if config.count:
        print(format_count(state.emitted, name, config), file=out)

    result.lines_seen = state.lines_seen
    result.emitted = state.emitted
    return result
