"""Tests for logging configuration."""

import logging

from rank_tracker.app_logging import configure_logging


def test_configure_logging_idempotent():
    logger = logging.getLogger("rank_tracker")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_level():
    configure_logging("warning")
    assert logging.getLogger("rank_tracker").level == logging.WARNING
    configure_logging()
