"""
Standardized JSON response helpers.

All API responses follow the envelope:

    Success:  {"success": true,  "message": "...", "data": ...}
    Error:    {"success": false, "message": "...", "error": {"code": 400, "message": "...", "details": {...}}}

Paginated list responses (``StandardResultsPagination``) add ``meta`` and,
where the viewset defines them, ``stats``.
"""

from rest_framework.response import Response
from rest_framework import status


def success_response(data=None, message='OK', http_status=status.HTTP_200_OK, **extra):
    """Return a successful JSON envelope."""
    payload = {'success': True, 'message': message, 'data': data}
    payload.update(extra)
    return Response(payload, status=http_status)

