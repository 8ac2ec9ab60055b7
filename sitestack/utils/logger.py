"""
Logging setup: coloured console output on stderr plus one shared log file
per day under logs/
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import colorlog


LOGS_DIR = Path("logs")

CONSOLE_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(blue)s[%(name)s]%(reset)s %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def _level(name: str) -> int:
    return getattr(logging, name.upper())


def daily_log_file() -> str:
    return f"sitestack_{datetime.now().strftime('%Y-%m-%d')}.log"


def setup_logger(name: str, level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach the console handler (and a file handler when ``log_file`` is
    given) to the named logger. Loggers that already have handlers are
    returned untouched apart from their level.

    Args:
        name:     Logger name (typically __name__ of the module)
        level:    Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: File name inside logs/, created on first use

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(_level(level))

    if logger.handlers:
        return logger

    # stdout is reserved for command output such as rendered templates
    console_handler = colorlog.StreamHandler(sys.stderr)
    console_handler.setLevel(_level(level))
    console_handler.setFormatter(colorlog.ColoredFormatter(CONSOLE_FORMAT, log_colors=LOG_COLORS))
    logger.addHandler(console_handler)

    if log_file:
        LOGS_DIR.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(LOGS_DIR / log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Logger writing to the console and to today's sitestack log file."""
    return setup_logger(name, level=level, log_file=daily_log_file())


def set_level(level: str) -> None:
    """
    Apply a level to every sitestack logger created so far. File handlers
    keep logging everything.

    Args:
        level: Logging level name, as validated by Settings.log_level
    """
    numeric = _level(level)
    for name, logger in logging.root.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        if name == "__main__" or name.startswith("sitestack"):
            logger.setLevel(numeric)
            for handler in logger.handlers:
                if not isinstance(handler, logging.FileHandler):
                    handler.setLevel(numeric)
