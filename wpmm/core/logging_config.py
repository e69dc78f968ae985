"""
Logging Configuration

Console and rotating file logging for wpmm runs.
- Sensitive values (database passwords, salts) are masked before they reach a handler
- File logging never crashes the caller
"""
import logging
import logging.handlers
import re
from pathlib import Path
from typing import Optional

from wpmm.core.config import get_settings


SECRET_CONSTANTS = (
    "DB_PASSWORD",
    "AUTH_KEY",
    "SECURE_AUTH_KEY",
    "LOGGED_IN_KEY",
    "NONCE_KEY",
    "AUTH_SALT",
    "SECURE_AUTH_SALT",
    "LOGGED_IN_SALT",
    "NONCE_SALT",
)

# Patterns for sensitive data that should be masked
SENSITIVE_PATTERNS = [
    (
        re.compile(r"(define\(\s*'(?:%s)'\s*,\s*)'[^']*'" % "|".join(SECRET_CONSTANTS)),
        r"\1'***'",
    ),
    (re.compile(r'password["\']?\s*[:=]\s*["\']?([^"\'}\s,]+)', re.IGNORECASE), 'password=***'),
    (re.compile(r'secret["\']?\s*[:=]\s*["\']?([^"\'}\s,]+)', re.IGNORECASE), 'secret=***'),
]


def sanitize_message(message: str) -> str:
    """Remove sensitive information from log messages."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class SanitizingFormatter(logging.Formatter):
    """Formatter that sanitizes sensitive data from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        record.msg = sanitize_message(str(record.msg))
        if record.args:
            record.args = tuple(
                sanitize_message(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return super().format(record)


class ResilientRotatingFileHandler(logging.handlers.RotatingFileHandler):
    """RotatingFileHandler that won't crash the run if logging fails."""

    def emit(self, record):
        try:
            super().emit(record)
        except Exception:
            self.handleError(record)


def get_log_dir() -> Path:
    """Get the logging directory, creating it if necessary."""
    log_dir = get_settings().log_dir or str(Path.cwd() / "logs")
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    return log_path


def setup_logging(
    log_level: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for a wpmm run.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        max_bytes: Maximum size of each log file before rotation
        backup_count: Number of rotated files to keep
        enable_file: Whether to also write wpmm.log in the log directory
    """
    level_str = log_level or get_settings().log_level
    level = getattr(logging, level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter
    root_logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(SanitizingFormatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    if enable_file:
        log_dir = get_log_dir()
        file_handler = ResilientRotatingFileHandler(
            log_dir / "wpmm.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(SanitizingFormatter(
            '%(asctime)s [%(levelname)s] %(name)s (%(module)s:%(lineno)d): %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug(f"Logging initialized: level={level_str}")
