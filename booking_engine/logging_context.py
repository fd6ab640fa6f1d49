"""Request ID logging context for tracing booking operations across modules.

Each create, cancel, or payment pipeline can run under its own request ID.
Loggers obtained through ``get_request_logger`` stamp that ID on every
record, so the validator, storage, and payment lines of one operation can
be grepped together.

Usage:
    from booking_engine.logging_context import get_request_logger, request_scope

    logger = get_request_logger(__name__)
    with request_scope("REQ-abc123"):
        logger.info("Creating booking")  # record.request_id == "REQ-abc123"
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "-"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Run a block under ``request_id`` (generated when omitted), then restore the previous ID."""
    token = _request_id.set(request_id or f"REQ-{uuid.uuid4().hex[:8]}")
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the current request ID onto log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def get_request_logger(name: str) -> logging.Logger:
    """Return the named logger with a RequestIdFilter attached exactly once."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
