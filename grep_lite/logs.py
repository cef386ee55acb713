from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path


def make_log_path() -> Path:
    """
    Create a logs folder in the current working directory (where you run grep-lite),
    and return a unique timestamp-based log filename.
    """
    logs_dir = Path.cwd() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return logs_dir / f"log_{ts}.txt"


def setup_logging(debug: bool) -> tuple[logging.Logger, Path]:
    logger = logging.getLogger("grep_lite")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    log_path = make_log_path()

    fmt = logging.Formatter("%(asctime)s %(levelname)s: %(message)s")

    # Every run logs to file
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setLevel(logging.DEBUG if debug else logging.INFO)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    # Warnings and errors also go to the terminal
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.WARNING)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    logger.info("Log started: %s", log_path)
    logger.info("CWD: %s", Path.cwd())

    return logger, log_path
