"""
Logging configuration for sketch replay.

Environment Variables:
    SKETCHREPLAY_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR - default: INFO
    SKETCHREPLAY_LOG_FORMAT: text, json - default: text

Usage:
    from sketchreplay.logging_config import setup_logging

    setup_logging("DEBUG", "json")
    logger = logging.getLogger(__name__)
    logger.info("Replay started", extra={"drawing": "spiral"})
"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """
    Configure the root logger with a single stdout handler.

    `fmt` selects the formatter: "json" for one JSON object per line,
    anything else for plain text.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)

    if fmt == "json":
        formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
