import logging

from util.logging_util import set_level, setup_logger


def test_setup_logger_adds_single_handler():
    logger = setup_logger("tests.logging_util.single")
    setup_logger("tests.logging_util.single")

    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_set_level_updates_handlers():
    logger = setup_logger("tests.logging_util.level")

    set_level(logging.DEBUG)
    try:
        assert logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in logger.handlers)
    finally:
        set_level(logging.INFO)
