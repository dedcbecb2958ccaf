"""Logging configuration for the API process."""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Install a single stdout handler with ISO timestamps on the root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    # requests' connection pool is noisy at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)
