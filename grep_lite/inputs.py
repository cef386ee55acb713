from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Optional

logger = logging.getLogger("grep_lite")

STDIN_NAME = "-"


class StreamReadError(Exception):
    """A line of a stream could not be read or decoded."""

    def __init__(self, name: str, cause: BaseException):
        super().__init__(str(cause))
        self.name = name
        self.cause = cause


@dataclass(frozen=True)
class StreamSource:
    name: str
    path: Optional[Path] = None  # None means standard input

    @property
    def is_stdin(self) -> bool:
        return self.path is None


# ----------------------------
# Resolution
# ----------------------------
def iter_tree(root: Path) -> Iterator[Path]:
    if root.is_file():
        yield root
        return
    if not root.is_dir():
        logger.warning("Path not found: %s", root)
        return
    for fp in sorted(root.rglob("*")):
        if fp.is_file():
            yield fp


def resolve_inputs(
    inputs: list[str],
    recursive: bool = False,
    exclude: Iterable[Path] = (),
) -> list[StreamSource]:
    if not inputs:
        return [StreamSource(STDIN_NAME)]

    skip = {p.resolve() for p in exclude}
    sources = []
    for raw in inputs:
        if not recursive:
            sources.append(StreamSource(raw, Path(raw)))
            continue
        for fp in iter_tree(Path(raw)):
            if fp.resolve() in skip:
                logger.debug("Skipping excluded file: %s", fp)
                continue
            sources.append(StreamSource(str(fp), fp))
    return sources


# ----------------------------
# Reading
# ----------------------------
def open_source(source: StreamSource) -> BinaryIO:
    """Binary handle for `source`; OSError propagates on open failure."""
    if source.is_stdin:
        return sys.stdin.buffer
    return source.path.open("rb")


def read_lines(f: BinaryIO, name: str, encoding: str = "utf-8") -> Iterator[str]:
    """
    Decode `f` one line at a time, without the line terminator.

    Each line is decoded on its own so a bad byte sequence fails exactly on
    the line that contains it.
    """
    while True:
        try:
            raw = f.readline()
            if not raw:
                return
            line = raw.decode(encoding)
        except (OSError, UnicodeDecodeError) as ex:
            raise StreamReadError(name, ex) from ex
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        yield line
