"""Shared utility functions for the Spendify project."""

import logging
from pathlib import Path

import colorlog

PROJECT_LOGGER = "spendify"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a project logger; the colorized console handler lives on the ``spendify`` logger."""
    project_logger = logging.getLogger(PROJECT_LOGGER)
    if not project_logger.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            f"%(log_color)s{LOG_FORMAT}",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        project_logger.addHandler(handler)
        project_logger.setLevel(logging.INFO)
    project_logger.propagate = False
    return logging.getLogger(name)


def ensure_dir(path: str | Path) -> None:
    """Ensure a directory exists (like mkdir -p)."""
    Path(path).mkdir(parents=True, exist_ok=True)
