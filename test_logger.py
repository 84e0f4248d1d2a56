"""
Tests for package logging setup.
"""

import logging

from html_readability.logger import get_module_logger, setup_logger


def test_stage_loggers_are_package_children():
    stage_logger = get_module_logger("cleaner")

    assert stage_logger.name == "html_readability.cleaner"
    assert stage_logger.parent is logging.getLogger("html_readability")


def test_repeat_setup_changes_level_without_new_handlers():
    package_logger = setup_logger()
    handlers_count = len(package_logger.handlers)

    try:
        setup_logger(level=logging.DEBUG)

        assert len(package_logger.handlers) == handlers_count
        assert package_logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in package_logger.handlers)
    finally:
        setup_logger(level=logging.INFO)
