"""Unit tests for the queue log handler."""

import logging
from queue import Queue

from tour_toolkit.utils.logging_utils import attach_queue_handler, detach_queue_handler, drain_queue


class TestQueueLogHandler:

    def test_attach_when_warning_logged_then_queued(self):
        log_queue = Queue()
        handler = attach_queue_handler(log_queue)
        try:
            logging.getLogger("tour_toolkit.ingestion.loader").warning("dataset down")
            logging.getLogger("tour_toolkit.ingestion.loader").critical("overlay gone")
        finally:
            detach_queue_handler(handler)

        assert drain_queue(log_queue) == [("dataset down", "WARNING"), ("overlay gone", "ERROR")]

    def test_detach_when_removed_then_nothing_queued(self):
        log_queue = Queue()
        handler = attach_queue_handler(log_queue)
        detach_queue_handler(handler)

        logging.getLogger("tour_toolkit").warning("ignored")

        assert drain_queue(log_queue) == []

    def test_handler_when_below_level_then_filtered(self):
        log_queue = Queue()
        handler = attach_queue_handler(log_queue)
        logger = logging.getLogger("tour_toolkit")
        previous = logger.level
        logger.setLevel(logging.DEBUG)
        try:
            logger.debug("detail")
        finally:
            logger.setLevel(previous)
            detach_queue_handler(handler)

        assert log_queue.empty()
