"""
Tests for logging configuration.
"""

import logging

import pytest

from tumblr_client.logger import (
    PACKAGE_LOGGER,
    CleanFormatter,
    CredentialFilter,
    mask_value,
    set_log_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers added by a test."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        handler.close()
    package_logger.handlers.clear()


class TestSetupLogging:
    """Test setup_logging."""

    def test_console_handler(self):
        """A console handler is attached to the package logger."""
        package_logger = setup_logging()

        assert package_logger.name == "tumblr_client"
        assert len(package_logger.handlers) == 1
        assert package_logger.handlers[0].level == logging.INFO

    def test_verbose(self):
        """Verbose mode logs debug messages."""
        package_logger = setup_logging(verbose=True)

        assert package_logger.handlers[0].level == logging.DEBUG

    def test_log_file(self, temp_dir):
        """Messages of child loggers reach the log file."""
        log_file = temp_dir / "logs" / "client.log"
        setup_logging(console=False, log_file=log_file)

        logging.getLogger("tumblr_client.client").debug("signed request")
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
            handler.flush()

        assert "signed request" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_replaces_handlers(self):
        """Calling setup twice does not duplicate handlers."""
        setup_logging()
        package_logger = setup_logging()

        assert len(package_logger.handlers) == 1

    def test_set_log_level(self):
        """Console handlers follow set_log_level."""
        package_logger = setup_logging()
        set_log_level(logging.WARNING)

        assert package_logger.handlers[0].level == logging.WARNING


class TestCleanFormatter:
    """Test CleanFormatter."""

    def _record(self, level=logging.WARNING):
        return logging.LogRecord("tumblr_client.envelope", level, __file__, 1, "API error", None, None)

    def test_plain(self):
        """Without colors the level is shown as is."""
        output = CleanFormatter(use_colors=False).format(self._record())

        assert "[WARNING] API error" in output

    def test_colored(self):
        """Colors wrap only the level name."""
        output = CleanFormatter(use_colors=True).format(self._record())

        assert "\033[33mWARNING\033[0m" in output

    def test_verbose_includes_logger_name(self):
        """Verbose output names the logger."""
        output = CleanFormatter(use_colors=False, verbose=True).format(self._record())

        assert "tumblr_client.envelope: API error" in output


class TestCredentialFilter:
    """Test CredentialFilter and mask_value."""

    def _filtered(self, msg, *args):
        record = logging.LogRecord("tumblr_client.oauth", logging.DEBUG, __file__, 1, msg, args, None)
        assert CredentialFilter().filter(record) is True
        return record.getMessage()

    @pytest.mark.parametrize("value, expected", [
        ("", "****"),
        ("abcd", "****"),
        ("access-secret", "****cret"),
    ])
    def test_mask_value(self, value, expected):
        """Only the last four characters survive."""
        assert mask_value(value) == expected

    def test_header_values_masked(self):
        """Quoted header parameters are masked."""
        message = self._filtered('OAuth oauth_token="access-token", oauth_signature="c2lnbmF0dXJl"')

        assert 'oauth_token="****oken"' in message
        assert 'oauth_signature="****dXJl"' in message
        assert "access-token" not in message

    def test_form_values_masked(self):
        """Form encoded token responses are masked, arguments included."""
        message = self._filtered("Token response: %s", "oauth_token=req-token&oauth_token_secret=req-secret")

        assert message == "Token response: oauth_token=****oken&oauth_token_secret=****cret"

    def test_other_messages_untouched(self):
        """Messages without credentials keep their arguments."""
        message = self._filtered("GET %s -> %d", "https://api.tumblr.com/v2/user/info", 200)

        assert message == "GET https://api.tumblr.com/v2/user/info -> 200"

    def test_handlers_mask_log_file(self, temp_dir):
        """Handlers created by setup_logging mask credentials."""
        log_file = temp_dir / "client.log"
        setup_logging(console=False, log_file=log_file)

        logging.getLogger("tumblr_client.oauth_client").info('oauth_token="access-token"')
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "access-token" not in content
        assert "****oken" in content
