"""Logger utility for the homework grader"""
import logging
import sys

from config import LOG_FILE, LOG_LEVEL


def setup_logger(name: str = "homework-grader", log_file: str = LOG_FILE) -> logging.Logger:
    """
    Set up a logger with console and (optionally) file handlers.

    Args:
        name: Logger name
        log_file: Path to log file, empty string for console only

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        # UTF-8 so student names and answers survive as typed
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
