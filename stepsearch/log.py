# stepsearch/log.py
from __future__ import annotations
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"

def setup_logging(level: str = "INFO") -> None:
    """Send engine/graph/viewer records to stdout, alongside the CLI's report lines.

    Replaces any handlers already on the root logger, so calling it again
    (e.g. `stepsearch view` after `stepsearch demo` in one process) only
    changes the level.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)
