"""Logging configuration shared by every module of the application.

Handlers are attached only to the application logger. Loggers returned by
get_logger() are its children and propagate to it.
"""

import logging
from datetime import datetime
from pathlib import Path

APP_LOGGER_NAME = "module_lang_editor"
LOG_DIR = Path.home() / ".module_lang_editor" / "logs"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-32s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _configure_app_logger():
    global _configured
    if _configured:
        return

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(logging.DEBUG)
    app_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    app_logger.addHandler(console_handler)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / f"module_lang_editor_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        app_logger.addHandler(file_handler)
    except OSError as e:
        app_logger.warning(f"File logging disabled, could not open log directory {LOG_DIR}: {e}")

    _configured = True


def set_console_level(level):
    """Change the level of the console handler.

    Args:
        level: A logging level number or name such as "DEBUG"
    """
    _configure_app_logger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")
    for handler in logging.getLogger(APP_LOGGER_NAME).handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger.

    Args:
        name: Short module name, e.g. "string_store"

    Returns:
        logging.Logger: Logger named module_lang_editor.<name>
    """
    _configure_app_logger()
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
