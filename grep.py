#!/usr/bin/env python3
"""Run grep-lite from a source checkout: python grep.py PATTERN [INPUTS...]"""
from grep_lite.cli import run

if __name__ == "__main__":
    run()
