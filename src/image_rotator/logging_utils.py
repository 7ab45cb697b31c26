"""
Shared logging utility for the rotimage command.

Verbose runs print one line per event (detected angle, saved file,
failure reason, listing warning). Quiet runs only print errors.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Any

from rich.console import Console
from rich.logging import RichHandler

SCRIPT_NAME = "rotimage"


def setup_script_logging(
    script_name: str, config: Dict[str, Any], verbose: bool = False
) -> logging.Logger:
    """
    Set up console logging for a script based on configuration.

    The log file for ``log_target = "file"`` is attached separately with
    add_file_logging, once the output directory exists.

    Args:
        script_name: Name of the script (used for logger and log file naming)
        config: Configuration dictionary with debug settings
        verbose: Whether to enable verbose console output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(script_name)

    # Clear any existing handlers to avoid duplicates
    logger.handlers.clear()

    debug_config = config.get("debug", {})
    console_level = logging.DEBUG if verbose else logging.ERROR

    if debug_config.get("use_rich", False):
        console_handler = RichHandler(
            console=Console(file=sys.stdout),
            show_time=False,
            show_path=False,
            markup=False,
        )
    else:
        console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)
    logger.setLevel(console_level)

    return logger


def add_file_logging(logger: logging.Logger, log_dir: Path, verbose: bool = False) -> Path:
    """
    Write a full DEBUG log to ``<log_dir>/<logger name>.log``.

    The directory must already exist; OSError from opening the file is
    left to the caller.

    Returns:
        Path of the log file
    """
    log_file = Path(log_dir) / f"{logger.name}.log"

    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)

    if verbose:
        print(f"Detailed logging to: {log_file}")
    return log_file


def get_script_logger(script_name: str = SCRIPT_NAME) -> logging.Logger:
    """
    Get the logger instance for a script.

    Args:
        script_name: Name of the script

    Returns:
        Logger instance (must be set up first with setup_script_logging)
    """
    return logging.getLogger(script_name)
