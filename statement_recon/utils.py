"""
Utility functions for the reconciliation command line.

Helpers used around the engine that are not part of ingestion, matching
or reporting themselves.
"""

import logging
import os
import pathlib

logger = logging.getLogger(__name__)


def setup_logging(debug=False, log_level='info', log_file=None):
    """Configure logging for a reconciliation run.

    Args:
        debug (bool): Log per-row parsing detail
        log_level (str): Level name used when debug is off
        log_file (str or Path, optional): Log destination. Falls back to the
            LOG_FILE environment variable, then debug.log.

    Returns:
        pathlib.Path: Path of the log file
    """
    # Debug wins over an explicit level
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    log_file = pathlib.Path(log_file or os.getenv('LOG_FILE', 'debug.log'))
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Statement rows can contain non-ASCII descriptions
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[file_handler, logging.StreamHandler()],
    )

    logger.debug(f"Logging to {log_file}")
    return log_file


def ensure_directory(dir_path):
    """Create a directory (and parents) if needed.

    Args:
        dir_path (str or pathlib.Path): Directory to create

    Returns:
        pathlib.Path: Path to the directory

    Raises:
        ValueError: If the path exists and is not a directory
    """
    dir_path = pathlib.Path(dir_path)
    if dir_path.exists() and not dir_path.is_dir():
        raise ValueError(f"Path is not a directory: {dir_path}")
    dir_path.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Using directory {dir_path}")
    return dir_path
