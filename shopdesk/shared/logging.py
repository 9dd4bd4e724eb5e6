"""
Logging setup for Shopdesk.

One stdout handler with a pipe-separated format. Configured API keys
are masked in every message that goes through it, so a key echoed by
a library or an error message never reaches the log.
"""

import logging
import sys
from typing import Iterable

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

REDACTED = "[redacted]"

# Kept at WARNING unless SQL logging is asked for.
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")


class SecretRedactingFilter(logging.Filter):
    """Replaces each known secret in a record's message with REDACTED."""

    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__()
        # Longest first, so a key containing another key is masked whole.
        self._secrets = tuple(sorted({s for s in secrets if s}, key=len, reverse=True))

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        masked = message
        for secret in self._secrets:
            masked = masked.replace(secret, REDACTED)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def configure_logging(
    level: str = "INFO", secrets: Iterable[str] = (), log_sql: bool = False
) -> None:
    """Configure the root logger.

    Args:
        level: Log level name; unknown names fall back to INFO.
        secrets: Values masked in every emitted message (the API keys).
        log_sql: Let SQLAlchemy's statement log through at INFO.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    handler.addFilter(SecretRedactingFilter(secrets))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if log_sql:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
