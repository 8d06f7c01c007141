"""Logging setup for the graplsub command line run."""

import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler

import colorlog

CONSOLE_HANDLER_NAME = 'graplsub.console'
FILE_HANDLER_NAME = 'graplsub.file'

DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_MAX_BYTES = 10485760  # 10 MB
DEFAULT_BACKUP_COUNT = 5

# Query parameters that carry the username, token, salt or a cleartext password
_SECRET_PARAM = re.compile(r'([?&](?:u|t|s|p)=)[^&\s\'"]+')


class RedactCredentialsFilter(logging.Filter):
    """Mask authentication query parameters in any URL that reaches a log line."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _SECRET_PARAM.sub(r'\1***', message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(levelname)s:%(name)s:%(message)s",
        log_colors={
            'DEBUG': 'bold_blue',
            'INFO': 'bold_green',
            'WARNING': 'bold_yellow',
            'ERROR': 'bold_red',
            'CRITICAL': 'bold_purple'
        }
    ))
    return handler


def _file_handler(path: str) -> logging.Handler:
    max_bytes = int(os.getenv('GRAPLSUB_LOG_FILE_MAX_BYTES', str(DEFAULT_MAX_BYTES)))
    backup_count = int(os.getenv('GRAPLSUB_LOG_FILE_BACKUP_COUNT', str(DEFAULT_BACKUP_COUNT)))

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    handler.set_name(FILE_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s - (%(filename)s:%(lineno)d)'
    ))
    return handler


def setup_logging() -> None:
    """Configure the root logger for one run.

    Coloured records go to stderr, and are also appended to a rotating file
    when ``GRAPLSUB_LOG_FILE`` is set. Every handler masks the ``u``, ``t``,
    ``s`` and ``p`` query parameters. Calling this again does not add
    duplicate handlers.

    Environment:
        GRAPLSUB_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
        GRAPLSUB_LOG_FILE: Path of the log file (unset: console only)
        GRAPLSUB_LOG_FILE_MAX_BYTES: Rotation size (default 10 MB)
        GRAPLSUB_LOG_FILE_BACKUP_COUNT: Rotated files kept (default 5)
    """
    requested_level = os.getenv('GRAPLSUB_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(requested_level)
    unknown_level = not isinstance(level, int)
    if unknown_level:
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    installed = {handler.get_name() for handler in root.handlers}
    handlers = []
    if CONSOLE_HANDLER_NAME not in installed:
        handlers.append(_console_handler())

    log_file = os.getenv('GRAPLSUB_LOG_FILE')
    if log_file and FILE_HANDLER_NAME not in installed:
        handlers.append(_file_handler(log_file))

    for handler in handlers:
        handler.addFilter(RedactCredentialsFilter())
        root.addHandler(handler)

    # httpx logs every request URL at INFO, query string included
    logging.getLogger('httpx').setLevel(logging.WARNING)

    if unknown_level:
        logging.getLogger(__name__).warning(
            f"Unknown GRAPLSUB_LOG_LEVEL '{requested_level}', using {DEFAULT_LOG_LEVEL}"
        )
