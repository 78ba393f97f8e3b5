"""
Log filters: correlation id and static extra fields.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

# Correlation id текущего запроса, отдельно для каждого потока
_correlation_id_storage = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id_storage.value = correlation_id


def get_correlation_id() -> Optional[str]:
    return getattr(_correlation_id_storage, 'value', None)


def clear_correlation_id() -> None:
    if hasattr(_correlation_id_storage, 'value'):
        delattr(_correlation_id_storage, 'value')


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """
    Установить correlation id на время запроса.

    Example:
        >>> with correlation_scope() as cid:
        ...     logger.info("Request started")  # запись получит correlation_id=cid
    """
    correlation_id = correlation_id or uuid.uuid4().hex
    previous = get_correlation_id()
    set_correlation_id(correlation_id)
    try:
        yield correlation_id
    finally:
        if previous is None:
            clear_correlation_id()
        else:
            set_correlation_id(previous)


class CorrelationIdFilter(logging.Filter):
    """Adds correlation_id from thread-local storage to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id and not hasattr(record, 'correlation_id'):
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service, environment, ...) to every record.

    Fields already present on the record are left alone.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
