"""
Centralized logging configuration.

Logs go to stdout and to one file per day under the log directory.
A redaction filter runs on both handlers: Gemini API keys and bearer
tokens must never reach a log line, even when an SDK error message
echoes them back.
"""
import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "aiosqlite", "sqlalchemy.engine")

_SECRET_PATTERNS = (
    # Google API keys
    (re.compile(r"AIza[0-9A-Za-z_\-]{20,}"), "AIza***"),
    # bearer tokens in echoed headers
    (re.compile(r"(Bearer\s+)[A-Za-z0-9_\-\.=]+", re.IGNORECASE), r"\1***"),
    # api_key=... / key=... query parameters
    (re.compile(r"((?:api_)?key=)[^&\s]+", re.IGNORECASE), r"\1***"),
)

_configured = False


class RedactSecretsFilter(logging.Filter):
    """Masks credentials in the formatted message of each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def redact(text: str) -> str:
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure console and daily file logging on the root logger.

    Repeated calls are no-ops, so every app built by create_app() can
    call this safely.

    Args:
        log_level: Console verbosity (the file always captures DEBUG)
        log_dir: Directory for acns_YYYYMMDD.log; defaults to ./logs

    Example:
        >>> logger = setup_logging("INFO")
        >>> logger.info("Application started")
    """
    global _configured

    root_logger = logging.getLogger()
    if _configured:
        return root_logger

    log_dir = Path(log_dir) if log_dir else Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"acns_{datetime.now().strftime('%Y%m%d')}.log"

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    redaction = RedactSecretsFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)

    for handler in (console_handler, file_handler):
        handler.setFormatter(formatter)
        handler.addFilter(redaction)
        root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    root_logger.debug(f"Logging configured: level={log_level}, file={log_file}")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger named after the module (pass __name__)."""
    return logging.getLogger(name)


class LoggerMixin:
    """Gives a class a ``self.logger`` named after the class."""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(self.__class__.__name__)
