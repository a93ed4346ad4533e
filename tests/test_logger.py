"""Tests for package logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from orders.logger import ROOT_LOGGER, get_logger


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


class TestGetLogger:
    """Module loggers share one rotating file handler."""

    def test_names_are_namespaced(self):
        assert get_logger("store").name == "orders.store"
        assert get_logger("orders.exporter").name == "orders.exporter"

    def test_single_handler_after_repeated_calls(self):
        for _ in range(3):
            get_logger("submission")
            get_logger("models")
        assert len(_file_handlers(logging.getLogger(ROOT_LOGGER))) == 1
        assert _file_handlers(get_logger("submission")) == []

    def test_records_reach_root_handler(self):
        logger = get_logger("store")
        assert logger.propagate
        assert logger.getEffectiveLevel() == logging.getLogger(ROOT_LOGGER).level
