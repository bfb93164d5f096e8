"""
Custom Exception Handler for DRF
"""

from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated, PermissionDenied, Throttled
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError, RestrictedError
from django.http import Http404
import logging

logger = logging.getLogger(__name__)
security_logger = logging.getLogger("security.audit")


def _error_payload(code, message, details=None):
    return {
        'success': False,
        'message': message,
        'error': {
            'code': code,
            'message': message,
            'details': details or {},
        }
    }


def custom_exception_handler(exc, context):
    """
    Custom exception handler that provides consistent error responses.
    """
    # Domain exceptions raised from services and views
    if isinstance(exc, APIException):
        if exc.status_code >= 500:
            logger.error("API error: %s", exc.message)
        else:
            logger.info("API error code=%s: %s", exc.code, exc.message)
        details = {'code': exc.code}
        if getattr(exc, 'field', None):
            details['field'] = exc.field
        return Response(_error_payload(exc.status_code, exc.message, details), status=exc.status_code)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        _log_security_event(exc, context, response.status_code)
        response.data = _error_payload(
            response.status_code,
            get_error_message(response.data),
            response.data if isinstance(response.data, dict) else {'detail': response.data},
        )
        return response

    # Handle Django ValidationError
    if isinstance(exc, DjangoValidationError):
        logger.warning("Validation error: %s", exc)
        if hasattr(exc, 'message_dict'):
            details = exc.message_dict
            message = get_error_message(details)
        else:
            messages = exc.messages if hasattr(exc, 'messages') else [str(exc)]
            details = {'validation_errors': messages}
            message = messages[0] if messages else 'Validation Error'
        return Response(_error_payload(400, message, details), status=status.HTTP_400_BAD_REQUEST)

    # Deletes blocked by PROTECT/RESTRICT foreign keys
    if isinstance(exc, (ProtectedError, RestrictedError)):
        related = exc.protected_objects if isinstance(exc, ProtectedError) else exc.restricted_objects
        labels = sorted({str(obj._meta.verbose_name_plural) for obj in related})
        message = f"Cannot delete this record because it is referenced by {', '.join(labels)}"
        logger.info("Delete blocked: %s", message)
        return Response(
            _error_payload(400, message, {'code': 'protected', 'related': labels}),
            status=status.HTTP_400_BAD_REQUEST
        )

    # Handle 404
    if isinstance(exc, Http404):
        return Response(
            _error_payload(404, 'Not Found', {'detail': str(exc)}),
            status=status.HTTP_404_NOT_FOUND
        )

    # Log unexpected exceptions
    logger.exception("Unexpected error: %s", exc)

    return Response(
        _error_payload(500, 'Internal Server Error', {'detail': 'An unexpected error occurred.'}),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _log_security_event(exc, context, status_code):
    if status_code not in (401, 403, 429):
        return

    request = context.get("request")
    if request is None:
        return

    user = getattr(request, "user", None)
    user_id = getattr(user, "id", None) if user and getattr(user, "is_authenticated", False) else None
    exc_name = exc.__class__.__name__
    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        event_type = "auth_failed"
    elif isinstance(exc, PermissionDenied):
        event_type = "permission_denied"
    elif isinstance(exc, Throttled):
        event_type = "throttled"
    else:
        event_type = "security_event"

    security_logger.warning(
        "api_security_event type=%s status=%s method=%s path=%s user_id=%s ip=%s error=%s",
        event_type,
        status_code,
        request.method,
        request.path,
        user_id,
        request.META.get("REMOTE_ADDR"),
        exc_name,
    )


def get_error_message(data):
    """Extract a user-friendly error message from response data"""
    if isinstance(data, dict):
        if 'detail' in data:
            detail = data['detail']
            if isinstance(detail, list) and detail:
                return str(detail[0])
            return str(detail)
        if 'non_field_errors' in data:
            return str(data['non_field_errors'][0])
        # Get first error message
        for key, value in data.items():
            if isinstance(value, list) and value:
                first = value[0]
                if isinstance(first, dict):
                    return get_error_message(first)
                return f"{key}: {first}"
            elif isinstance(value, dict):
                return get_error_message(value)
            elif isinstance(value, str):
                return f"{key}: {value}"
    elif isinstance(data, list) and data:
        return str(data[0])
    return str(data)


class APIException(Exception):
    """Base exception for API errors"""

    def __init__(self, message, code=None, status_code=status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.code = code or 'error'
        self.status_code = status_code
        super().__init__(message)


class ValidationException(APIException):
    """Validation error exception"""

    def __init__(self, message, field=None):
        super().__init__(message, code='validation_error', status_code=status.HTTP_400_BAD_REQUEST)
        self.field = field


class DuplicateResourceException(ValidationException):
    """A unique name or code is already taken."""

    def __init__(self, resource_type, field='code'):
        super().__init__(f"{resource_type} {field} already exists", field=field)
        self.code = 'duplicate'


class InvalidStateException(APIException):
    """Raised when a status transition is not allowed"""

    def __init__(self, message):
        super().__init__(message, code='invalid_state', status_code=status.HTTP_400_BAD_REQUEST)


class PermissionDeniedException(APIException):
    """Permission denied exception"""

    def __init__(self, message="You do not have permission to perform this action"):
        super().__init__(message, code='permission_denied', status_code=status.HTTP_403_FORBIDDEN)


class ResourceNotFoundException(APIException):
    """Resource not found exception"""

    def __init__(self, resource_type, resource_id=None, message=None):
        if message is None:
            message = f"{resource_type} not found"
            if resource_id:
                message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message, code='not_found', status_code=status.HTTP_404_NOT_FOUND)
