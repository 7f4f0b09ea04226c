"""
Logging setup

Everything goes through loguru: application code logs with
``from loguru import logger`` and uvicorn/SQLAlchemy records are routed in
through InterceptHandler.
"""
import logging
import sys

from loguru import logger

from .config import settings


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function}:{line} | {message}"

STDLIB_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "sqlalchemy.engine")


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru, keeping the original caller"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _json_console() -> bool:
    return settings.LOG_JSON_FORMAT and settings.ENVIRONMENT == "production"


def configure_logging():
    """Install sinks according to settings; safe to call more than once"""
    logger.remove()

    if _json_console():
        logger.add(sys.stdout, level=settings.LOG_LEVEL, serialize=True)
    else:
        logger.add(sys.stdout, level=settings.LOG_LEVEL, format=CONSOLE_FORMAT, colorize=True)

    if settings.LOG_TO_FILE:
        logger.add(
            "logs/portal_{time:YYYY-MM-DD}.log",
            level=settings.LOG_LEVEL,
            format=FILE_FORMAT,
            rotation="00:00",
            retention="30 days",
            serialize=settings.LOG_JSON_FORMAT,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in STDLIB_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [InterceptHandler()]
        stdlib_logger.propagate = False

    logger.debug(f"Logging configured: level={settings.LOG_LEVEL}, json={_json_console()}")
