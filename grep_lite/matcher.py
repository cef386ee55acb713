from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator


class PatternError(ValueError):
    """The search pattern could not be compiled."""


@dataclass(frozen=True)
class Matcher:
    rx: re.Pattern
    invert: bool = False

    def is_match(self, line: str) -> bool:
        return (self.rx.search(line) is not None) != self.invert

    def spans(self, line: str) -> Iterator[tuple[int, int]]:
        for m in self.rx.finditer(line):
            a, b = m.span()
            if a < b:
                yield a, b


def compile_matcher(pattern: str, ignore_case: bool = False, invert: bool = False) -> Matcher:
    flags = re.IGNORECASE if ignore_case else 0
    try:
        rx = re.compile(pattern, flags)
    except re.error as ex:
        raise PatternError(f"Invalid regex: {ex}") from ex
    return Matcher(rx=rx, invert=invert)
