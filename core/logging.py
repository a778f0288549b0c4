"""
Logging configuration

Pipeline errors are logged with ``extra={"error_context": exc.to_dict()}``;
the formatter below appends that context to the line so a skipped page,
record or batch can be traced from the log output alone.
"""

import logging
import sys
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class ErrorContextFormatter(logging.Formatter):
    """Appends the ``error_context`` extra, when present, as key=value pairs"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        error_context = getattr(record, "error_context", None)
        if not error_context:
            return line
        details = error_context.get("context") or {}
        pairs = " ".join(
            f"{key}={value}" for key, value in details.items() if key != "error_timestamp"
        )
        return f"{line} | {error_context.get('error_type')} {pairs}".rstrip()


def setup_logging():
    """Configure application logging"""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ErrorContextFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    # Thousands of requests and batch statements per run; keep them out of INFO
    for noisy in ("sqlalchemy.engine", "sqlalchemy.pool", "httpx", "httpcore", "apscheduler"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {settings.LOG_LEVEL} level")
