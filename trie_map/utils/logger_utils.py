# logger_utils.py - logging setup and timing metrics

import logging
import time
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("trie_map")


def setup_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """
    Attach a rich handler to the package logger. Safe to call twice,
    the second call only changes the level.
    """
    logger.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


class Log:
    """Metric helpers on top of the package logger."""

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric (timing, counts) at INFO.
        Example: load done: 0.012s
        """
        logger.info("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label):
        """
        Measure a code block:
            with Log.time_block("load"):
                do_some_work()
        The elapsed seconds end up in `.elapsed` and in the log.
        """
        return _Timer(label)


class _Timer:
    """Context manager used by Log.time_block."""

    def __init__(self, label):
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = round(time.perf_counter() - self.start, 3)
        Log.metric(f"{self.label} done", self.elapsed, "s")
        return False
