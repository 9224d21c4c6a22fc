import logging
from typing import Optional

from .config import Settings

LOG_FORMAT = (
    "%(asctime)s %(levelname)s [%(name)s] %(message)s "
    "request_id=%(request_id)s trace_id=%(trace_id)s"
)


class CorrelationFilter(logging.Filter):
    """Fill in correlation fields for records logged outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        if not hasattr(record, "trace_id"):
            record.trace_id = "-"
        return True


def resolve_log_level(settings: Settings) -> str:
    if settings.log_level:
        return settings.log_level.upper()
    return "DEBUG" if settings.is_development else "INFO"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structured logging defaults for the application."""
    settings = settings or Settings()
    logging.basicConfig(level=resolve_log_level(settings), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(item, CorrelationFilter) for item in handler.filters):
            handler.addFilter(CorrelationFilter())
