"""Tests for the package logger."""

import logging

import pytest

from format_pkg.logger import LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """Clear issues and handlers installed by a test."""
    yield
    logger = get_logger()
    logger.clear_issues()
    for handler in list(logger.logger.handlers):
        logger.logger.removeHandler(handler)
        handler.close()


class TestFormatLogger:
    """Test the process-wide logger."""

    def test_singleton(self):
        """Test that every call returns the same logger."""
        assert get_logger() is get_logger()
        assert get_logger().logger.name == LOGGER_NAME

    def test_add_validation_issue(self, caplog):
        """Test that issues are stored and logged at their level."""
        logger = get_logger()
        logger.clear_issues()

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            logger.add_validation_issue('error', 'schema', 'Broken field', {'field': 'score'})

        assert logger.validation_issues == [{
            'level': 'ERROR',
            'category': 'schema',
            'message': 'Broken field',
            'details': {'field': 'score'},
        }]
        assert caplog.records[-1].levelno == logging.ERROR
        assert '[schema] Broken field' in caplog.text

    def test_unknown_level_logged_as_warning(self, caplog):
        """Test the fallback for unknown level names."""
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            get_logger().add_validation_issue('loud', 'record', 'Odd value')

        assert caplog.records[-1].levelno == logging.WARNING


class TestSetupLogging:
    """Test handler configuration."""

    def test_console_only(self):
        """Test that a console handler is installed."""
        logger = setup_logging(console_level='WARNING')

        handlers = logger.logger.handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.WARNING

    def test_log_file(self, tmp_path):
        """Test logging to a file in a new directory."""
        log_file = tmp_path / 'logs' / 'format.log'
        logger = setup_logging(console_level='ERROR', log_file=log_file)

        logger.debug('descriptor built')
        for handler in logger.logger.handlers:
            handler.flush()

        assert 'descriptor built' in log_file.read_text()

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        """Test that calling setup twice does not duplicate handlers."""
        setup_logging(log_file=tmp_path / 'a.log')
        logger = setup_logging()

        assert len(logger.logger.handlers) == 1
