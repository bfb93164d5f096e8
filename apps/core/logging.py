"""Correlation-id plumbing for structured logs."""
import uuid
from contextvars import ContextVar
from typing import Optional

CORRELATION_ID_HEADER = 'X-Correlation-ID'

_correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


def set_correlation_id(correlation_id: Optional[str]):
    return _correlation_id_var.set(correlation_id)


def reset_correlation_id(token) -> None:
    _correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()


def new_correlation_id() -> str:
    return uuid.uuid4().hex


class CorrelationIdFilter:
    def filter(self, record):
        record.correlation_id = get_correlation_id() or 'unknown'
        return True
