"""Logging setup for command-line runners.

The library only creates module loggers; handlers are installed here by
whoever drives it.
"""

import logging
import sys


class PlainFormatter(logging.Formatter):
    """``time | LEVEL | logger | message`` lines."""

    def format(self, record):
        timestamp = self.formatTime(record, self.datefmt)
        short_name = record.name.split(".")[-1]
        return f"{timestamp} | {record.levelname:8} | {short_name:12} | {record.getMessage()}"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Install a single stdout handler on the root logger."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(PlainFormatter(datefmt="%H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)

    # rdflib is chatty at DEBUG
    logging.getLogger("rdflib").setLevel(logging.WARNING)
