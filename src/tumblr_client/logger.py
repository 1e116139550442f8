"""Logging setup for the ``tumblr_client`` package logger."""

import logging
import re
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "tumblr_client"

LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
RESET = '\033[0m'

# oauth_token="abc", oauth_signature=abc%3D, oauth_token_secret=abc&...
_CREDENTIAL_PATTERN = re.compile(
    r'(?P<name>oauth_(?:token_secret|token|signature|verifier))(?P<sep>="|=)(?P<value>[^"&,\s]+)'
)


def mask_value(value: str) -> str:
    """Mask a credential, keeping only its last 4 characters."""
    if not value or len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"


class CredentialFilter(logging.Filter):
    """
    Masks OAuth tokens, secrets and signatures in log messages.

    Attached to every handler created by ``setup_logging`` so that signed
    URLs, token responses and ``Authorization`` headers never reach a log
    file in clear text.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _CREDENTIAL_PATTERN.sub(
            lambda m: f"{m.group('name')}{m.group('sep')}{mask_value(m.group('value'))}",
            message,
        )
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class CleanFormatter(logging.Formatter):
    """
    ``asctime [LEVEL] message`` formatter.

    Verbose mode adds the logger name; with colors on, only the level name
    is wrapped in ANSI codes.
    """

    def __init__(self, use_colors: bool = True, verbose: bool = False):
        self.use_colors = use_colors
        self.verbose = verbose
        name = '%(name)s: ' if verbose else ''
        super().__init__(fmt=f'%(asctime)s [%(levelname)s] {name}%(message)s', datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = LEVEL_COLORS.get(record.levelname)
        if self.use_colors and color:
            formatted = formatted.replace(
                f'[{record.levelname}]', f'[{color}{record.levelname}{RESET}]', 1
            )
        return formatted


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(CredentialFilter())
    return handler


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    console: bool = True,
    level: Optional[int] = None
) -> logging.Logger:
    """Configure the ``tumblr_client`` logger.

    The root logger is left alone; applications embedding the client keep
    their own logging tree. Calling this again replaces the handlers.

    Args:
        verbose: Log DEBUG messages and show logger names
        log_file: Optional file receiving every message
        console: Log to stdout
        level: Console level, overriding the one implied by ``verbose``

    Returns:
        The package logger

    Example:
        setup_logging(verbose=config.verbose, log_file=config.log_file)
    """
    if level is None:
        level = logging.DEBUG if verbose else logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if console:
        package_logger.addHandler(_make_handler(
            logging.StreamHandler(sys.stdout), level, CleanFormatter(use_colors=True, verbose=verbose)
        ))

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        package_logger.addHandler(_make_handler(
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.DEBUG,
            CleanFormatter(use_colors=False, verbose=True),
        ))

    logging.getLogger('aiohttp').setLevel(logging.WARNING)

    return package_logger


def set_log_level(level: int) -> None:
    """Change the level of the console handlers of the package logger."""
    for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stdout:
            handler.setLevel(level)
