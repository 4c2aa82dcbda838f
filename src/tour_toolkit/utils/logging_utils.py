"""
Logging setup for the command line, and a queue handler that feeds tour
warnings (skipped records, unavailable sources) to a presentation-layer
console.
"""
from __future__ import annotations

import logging
from queue import Empty, Queue
from typing import List, Optional, Tuple


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
PACKAGE_LOGGER = "tour_toolkit"

# Console shows three levels only
_CONSOLE_LEVELS = {
    "DEBUG": "INFO",
    "INFO": "INFO",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
    "CRITICAL": "ERROR",
}


def configure_logging(level: int = logging.INFO) -> None:
    """Root logging for command-line use."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


class QueueLogHandler(logging.Handler):
    """
    Puts (message, console_level) tuples on a queue.

    The console polls the queue from its own thread, so loader and
    navigator code never touches the UI directly.
    """

    def __init__(self, log_queue: Queue, level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.log_queue.put((self.format(record), _CONSOLE_LEVELS.get(record.levelname, "INFO")))
        except Exception:
            self.handleError(record)


def attach_queue_handler(log_queue: Queue, logger_name: Optional[str] = PACKAGE_LOGGER) -> QueueLogHandler:
    """
    Attach a QueueLogHandler (defaults to the package logger).

    Returns:
        The handler, for detach_queue_handler()
    """
    handler = QueueLogHandler(log_queue)
    logging.getLogger(logger_name).addHandler(handler)
    return handler


def detach_queue_handler(handler: QueueLogHandler, logger_name: Optional[str] = PACKAGE_LOGGER) -> None:
    logging.getLogger(logger_name).removeHandler(handler)


def drain_queue(log_queue: Queue) -> List[Tuple[str, str]]:
    """Take every pending (message, level) entry without blocking."""
    entries: List[Tuple[str, str]] = []
    while True:
        try:
            entries.append(log_queue.get_nowait())
        except Empty:
            return entries
