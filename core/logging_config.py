"""Logging configuration for the tracker."""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Configure process logging.

    Args:
        level: Logging level name (default: INFO). Unknown names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
