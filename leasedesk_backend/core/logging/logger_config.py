"""
Central logging configuration for LeaseDesk.
"""

import logging

from ...config import Settings
from .context import TransactionIdFilter
from .file_logger import FileLogger, route_loggers_to_queue
from .structured_logger import ROOT_LOGGER_NAME, setup_structured_logging


class LoggingConfig:
    """Applies the logging settings once per process."""

    def __init__(self):
        self.file_logger: FileLogger | None = None
        self._is_configured = False

    def setup(self, settings: Settings) -> logging.Logger:
        if self._is_configured:
            return get_logger()

        transaction_filter = TransactionIdFilter()
        use_json_format = settings.log_format.lower() == "json"

        if settings.log_to_file:
            self.file_logger = FileLogger(
                log_file_path=settings.log_file_path,
                max_bytes=settings.log_max_bytes,
                backup_count=settings.log_backup_count,
                log_level=settings.log_level,
                use_json_format=use_json_format,
            )
            self.file_logger.start()
            queue_handler = self.file_logger.get_queue_handler()
            queue_handler.addFilter(transaction_filter)
            route_loggers_to_queue(queue_handler)
        else:
            logger = setup_structured_logging(settings.log_level, use_json_format)
            for handler in logger.handlers:
                handler.addFilter(transaction_filter)

        self._is_configured = True
        return get_logger()

    def shutdown(self) -> None:
        if self.file_logger:
            self.file_logger.stop()
            self.file_logger = None
        self._is_configured = False


_logging_config = LoggingConfig()


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure logging from application settings.

    Args:
        settings: Loaded application settings (``log_*`` fields)

    Returns:
        The application root logger
    """
    return _logging_config.setup(settings)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger inside the application logger tree."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def shutdown_logging() -> None:
    _logging_config.shutdown()
