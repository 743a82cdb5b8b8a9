"""
Logging utilities for the interview engine.
"""
import os
import logging


def setup_logging(log_file_path: str, console_level: str = "WARNING") -> str:
    """
    Set up logging to file with minimal console output.

    Args:
        log_file_path: Full path to the log file
        console_level: Level name for the console handler

    Returns:
        Path to the log file
    """
    workdir = os.path.dirname(log_file_path)
    if workdir:
        os.makedirs(workdir, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # File handler for detailed logs
    file_handler = logging.FileHandler(log_file_path, mode='a')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s - %(message)s'))

    # Console handler only surfaces problems
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.WARNING))
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # ultralytics and urllib3 are chatty at DEBUG
    for noisy in ("ultralytics", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return log_file_path
