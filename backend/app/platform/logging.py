import copy
import logging
import sys

from app.platform.config import settings
from app.platform.sanitizer import redact_pii

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class PIIRedactingFormatter(logging.Formatter):
    """Formatter that redacts PII from log messages and tracebacks.

    Works on a copy of the record so other handlers still see the original.
    """

    def format(self, record: logging.LogRecord) -> str:
        record = copy.copy(record)
        record.exc_text = None
        record.msg = redact_pii(str(record.msg))
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: redact_pii(value) if isinstance(value, str) else value
                    for key, value in record.args.items()
                }
            else:
                record.args = tuple(
                    redact_pii(arg) if isinstance(arg, str) else arg for arg in record.args
                )
        return super().format(record)

    def formatException(self, ei) -> str:
        return redact_pii(super().formatException(ei))

    def formatStack(self, stack_info: str) -> str:
        return redact_pii(super().formatStack(stack_info))


def setup_logging(level: str | None = None) -> logging.Logger:
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(PIIRedactingFormatter(_LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, PIIRedactingFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured. Level: %s", logging.getLevelName(log_level))
    return logger
