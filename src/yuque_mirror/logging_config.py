"""Logging configuration for yuque-mirror."""

import sys

from loguru import logger
from tqdm import tqdm


def configure_logging(*, verbose: bool = False) -> None:
    """Configure loguru with appropriate level.

    Messages go through tqdm.write so they never tear an active progress bar.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        lambda msg: tqdm.write(msg, file=sys.stderr, end=""),
        level=level,
        format="{level.icon} {message}",
        colorize=False,
    )
