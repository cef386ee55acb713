from __future__ import annotations

import pytest

from grep_lite.matcher import PatternError, compile_matcher


def test_is_match_and_invert() -> None:
    m = compile_matcher(r"err(or)?")
    assert m.is_match("an error here")
    assert not m.is_match("all good")

    inv = compile_matcher(r"err(or)?", invert=True)
    assert not inv.is_match("an error here")
    assert inv.is_match("all good")


def test_ignore_case() -> None:
    assert not compile_matcher("hello").is_match("HeLLo world")
    assert compile_matcher("hello", ignore_case=True).is_match("HeLLo world")


def test_spans_are_ordered_and_skip_empty_matches() -> None:
    assert list(compile_matcher("ab").spans("xxabyab")) == [(2, 4), (5, 7)]
    assert list(compile_matcher("x*").spans("axxb")) == [(1, 3)]


def test_invalid_pattern() -> None:
    with pytest.raises(PatternError) as exc:
        compile_matcher("(unclosed")
    assert "Invalid regex" in str(exc.value)
