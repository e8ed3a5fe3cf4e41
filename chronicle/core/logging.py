import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger import jsonlogger

from chronicle.core.config import settings

LOGGER_NAME = "chronicle"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(message)s"


def _json_file_handler(log_file: str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=3)
    handler.setFormatter(jsonlogger.JsonFormatter(
        JSON_FORMAT,
        rename_fields={"asctime": "timestamp", "levelname": "level"},
    ))
    return handler


def setup_logging() -> logging.Logger:
    """Console logs for humans, JSON lines in settings.log_file for shipping.

    Safe to call repeatedly; handlers are only attached once.
    """
    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if app_logger.handlers:
        return app_logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console_handler)

    # An empty LOG_FILE disables the JSON file (read-only filesystems)
    if settings.log_file:
        app_logger.addHandler(_json_file_handler(settings.log_file))

    return app_logger


# Global logger
logger = setup_logging()
