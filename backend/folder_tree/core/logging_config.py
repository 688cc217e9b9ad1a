"""
Logging setup for the folder tree backend.

Every module logs through `get_logger(__name__)`; `setup_logging()` is called
once by the application entry point and attaches a console handler (plus an
optional file handler) to the root logger.

Environment:
    LOG_LEVEL    root level (default INFO)
    LOG_DIR      directory of the file handler (default logs)
    LOG_TO_FILE  "false" disables the file handler
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"

LOG_FILE_NAME = "folder_tree.log"

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Third-party loggers and the level they are held at
LIBRARY_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.INFO,
    "uvicorn.error": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    # The file keeps DEBUG output (listings, name probes) whatever the console level
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    enable_file_logging: bool = LOG_TO_FILE
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of the log file (defaults to LOG_DIR/folder_tree.log)
        enable_file_logging: Attach the file handler
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Calling setup twice (reload, tests) must not duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(level))

    if enable_file_logging:
        target = Path(log_file) if log_file is not None else LOG_DIR / LOG_FILE_NAME
        root_logger.addHandler(_file_handler(target))

    for name, library_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)
