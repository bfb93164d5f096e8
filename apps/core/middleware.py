"""
Core middleware
"""
import logging

from .logging import (
    CORRELATION_ID_HEADER,
    new_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware:
    """
    Binds a correlation id to the request for log records.

    Reuses the caller's ``X-Correlation-ID`` header when present and echoes
    the id back on the response.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or new_correlation_id()
        request.correlation_id = correlation_id
        token = set_correlation_id(correlation_id)
        try:
            response = self.get_response(request)
        finally:
            reset_correlation_id(token)
        response[CORRELATION_ID_HEADER] = correlation_id
        return response
