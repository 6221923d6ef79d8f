"""Centralized logging configuration."""

import logging
import re
from typing import Optional

from owm_forecast.config import LOG_LEVEL

API_KEY_PATTERN = re.compile(r"(appid=)[^&\s\"]+")


class RedactApiKeyFilter(logging.Filter):
    """Masks the appid query parameter in request URLs logged by httpx."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = API_KEY_PATTERN.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: Optional[str] = None):
    """
    Configure a consistent logging format for the entire application.

    Args:
        level: Log level name; falls back to LOG_LEVEL from config
    """
    log_level = logging.getLevelName((level or LOG_LEVEL).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    # Define the standard formatter
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Third-party loggers get their own handler with the same format
    loggers_to_configure = [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "fastapi",
    ]

    for logger_name in loggers_to_configure:
        logger = logging.getLogger(logger_name)
        logger.setLevel(log_level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Don't propagate to avoid duplicate messages
        logger.propagate = False

        handler = logging.StreamHandler()
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

        logger.addHandler(handler)

    # httpx logs full request URLs at INFO, appid included
    httpx_logger = logging.getLogger("httpx")
    if not any(isinstance(f, RedactApiKeyFilter) for f in httpx_logger.filters):
        httpx_logger.addFilter(RedactApiKeyFilter())
