"""
Queue-based file logging with rotation.

Records are pushed onto an in-memory queue by the request path and written
to console and a rotating file by a background listener thread.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler

from .structured_logger import NOISY_LOGGERS, build_formatter


class FileLogger:
    """Owns the log queue, its listener and the handlers behind it."""

    def __init__(
        self,
        log_file_path: str = "logs/app.log",
        max_bytes: int = 50 * 1024 * 1024,
        backup_count: int = 5,
        log_level: str = "INFO",
        use_json_format: bool = True,
    ):
        self.log_file_path = log_file_path
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.level = getattr(logging, log_level.upper())
        self.use_json_format = use_json_format
        self._log_queue: queue.Queue = queue.Queue()
        self._listener: QueueListener | None = None
        self._queue_handler: QueueHandler | None = None

        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    def _handlers(self) -> list[logging.Handler]:
        formatter = build_formatter(self.use_json_format)

        file_handler = RotatingFileHandler(
            self.log_file_path, maxBytes=self.max_bytes, backupCount=self.backup_count
        )
        console_handler = logging.StreamHandler(sys.stdout)

        for handler in (file_handler, console_handler):
            handler.setLevel(self.level)
            handler.setFormatter(formatter)
        return [console_handler, file_handler]

    def start(self) -> None:
        self._listener = QueueListener(
            self._log_queue, *self._handlers(), respect_handler_level=True
        )
        self._listener.start()

    def get_queue_handler(self) -> QueueHandler:
        if self._queue_handler is None:
            self._queue_handler = QueueHandler(self._log_queue)
            self._queue_handler.setLevel(self.level)
        return self._queue_handler

    def stop(self) -> None:
        """Flush pending records and stop the listener thread."""
        if self._listener:
            self._listener.stop()
            self._listener = None


def route_loggers_to_queue(queue_handler: QueueHandler) -> None:
    """Send root, third-party and warnings output through the queue."""
    for name, level in NOISY_LOGGERS.items():
        ext_logger = logging.getLogger(name)
        ext_logger.handlers.clear()
        ext_logger.addHandler(queue_handler)
        ext_logger.propagate = False
        ext_logger.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(queue_handler)
    root_logger.setLevel(queue_handler.level)

    logging.captureWarnings(True)
    warnings_logger = logging.getLogger("py.warnings")
    warnings_logger.handlers.clear()
    warnings_logger.addHandler(queue_handler)
    warnings_logger.propagate = False
