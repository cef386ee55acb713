from __future__ import annotations

from typing import Iterable

ANSI_RESET = "\x1b[0m"
ANSI_DIM = "\x1b[2m"
ANSI_RED = "\x1b[31m"
ANSI_CYAN = "\x1b[36m"
ANSI_MATCH = "\x1b[1;91m"  # bold bright red


def supports_color(stream) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


def color_enabled_for(mode: str, stream) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return supports_color(stream)


def colorize(s: str, color: str, enabled: bool) -> str:
    return f"{color}{s}{ANSI_RESET}" if enabled else s


def highlight_spans(line: str, spans: Iterable[tuple[int, int]], enabled: bool = True) -> str:
    """
    Wrap each (start, end) span of `line` in the match color.

    Spans must be sorted and non-overlapping; characters outside them are
    copied unchanged. Empty spans are ignored.
    """
    if not enabled:
        return line
    parts = []
    pos = 0
    for a, b in spans:
        if a >= b:
            continue
        parts.append(line[pos:a])
        parts.append(ANSI_MATCH + line[a:b] + ANSI_RESET)
        pos = b
    parts.append(line[pos:])
    return "".join(parts)
