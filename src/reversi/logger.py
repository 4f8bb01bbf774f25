"""
Logging setup for Reversi vs CPU.
"""
import os
import logging
from datetime import datetime
from typing import Optional

from .config import Config

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(config: Config, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``reversi`` logger from the config.

    Args:
        config: Configuration object
        log_dir: Directory for log files (default: config.logging.log_dir)

    Returns:
        The configured package logger
    """
    level = getattr(logging, config.logging.log_level.upper(), logging.INFO)
    if config.logging.verbose:
        level = logging.DEBUG

    logger = logging.getLogger('reversi')
    logger.setLevel(level)

    # Remove handlers from a previous call to prevent duplicate logging
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if config.logging.log_to_file:
        run_name = f"{config.project_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        run_dir = os.path.join(log_dir or config.logging.log_dir, run_name)
        os.makedirs(run_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(run_dir, 'reversi.log'))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
