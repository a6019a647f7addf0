"""
Logging configuration for the application.

structlog renders every event (JSON in production, console in
development) and hands the line to the standard library handlers:
stdout, a rotating ``app.log`` and a rotating ``error.log``.
Japanese labels (process steps, cause categories, respondents) are
written unescaped.

File settings come from the environment or ``.env.logging``:
LOG_DIR, MAX_LOG_SIZE, BACKUP_COUNT, APP_LOG_FILE, ERROR_LOG_FILE.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

import structlog
from dotenv import load_dotenv
from structlog.typing import FilteringBoundLogger

LOG_ENCODING = "utf-8"


def _rotating_handler(log_dir: str, filename: str, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=os.path.join(log_dir, filename),
        maxBytes=int(os.getenv("MAX_LOG_SIZE", "10485760")),  # 10MB
        backupCount=int(os.getenv("BACKUP_COUNT", "5")),
        encoding=LOG_ENCODING,
    )
    handler.setLevel(level)
    return handler


def setup_logging(level: str = "INFO", format_type: str = "json") -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" for production, anything else for console output
    """
    load_dotenv(".env.logging")

    log_level = getattr(logging, os.getenv("LOG_LEVEL", level).upper(), logging.INFO)
    log_format = os.getenv("LOG_FORMAT", format_type)
    log_dir = os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[
            console_handler,
            _rotating_handler(log_dir, os.getenv("APP_LOG_FILE", "app.log"), log_level),
            _rotating_handler(log_dir, os.getenv("ERROR_LOG_FILE", "error.log"), logging.ERROR),
        ],
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,  # request_id from the middleware
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structured logger instance.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Defect record added", record_id=str(record.id))
        ```
    """
    return structlog.get_logger(name)
