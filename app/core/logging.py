# app/core/logging.py
import logging
import sys
from typing import Any, Dict

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty at DEBUG: every RPC request and pooled connection
NOISY_LOGGERS = ["web3.providers", "web3.manager", "urllib3.connectionpool"]


def _level() -> int:
    if settings.LOG_LEVEL:
        return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    return logging.DEBUG if settings.DEBUG else logging.INFO


def _render(message: str, context: Dict[str, Any]) -> str:
    if not context:
        return message
    return f"{message} [{', '.join(f'{k}={v}' for k, v in context.items())}]"


class AppLogger:
    """Stdout logger; keyword arguments are appended as key=value context."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self._setup_logger()

    def _setup_logger(self):
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)
            self.logger.setLevel(_level())
            self.logger.propagate = False
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    def debug(self, message: str, **context):
        self.logger.debug(_render(message, context))

    def info(self, message: str, **context):
        self.logger.info(_render(message, context))

    def warning(self, message: str, **context):
        self.logger.warning(_render(message, context))

    def error(self, message: str, **context):
        self.logger.error(_render(message, context))

    def exception(self, message: str, **context):
        self.logger.exception(_render(message, context))


def get_logger(name: str) -> AppLogger:
    """Get a logger instance."""
    return AppLogger(name)
