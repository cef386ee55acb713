"""grep-lite: a small grep-like utility with context windows."""

from grep_lite.matcher import Matcher, PatternError, compile_matcher
from grep_lite.scanner import LineRecord, ScanConfig, ScanResult, scan_stream

__version__ = "0.1"

__all__ = [
    "LineRecord",
    "Matcher",
    "PatternError",
    "ScanConfig",
    "ScanResult",
    "compile_matcher",
    "scan_stream",
]
