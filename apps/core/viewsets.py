"""
Shared base ViewSet classes for all HRMS apps.

Every CRUD ModelViewSet should inherit from ``HRMSModelViewSet`` so that the
standard response envelope, pagination, filtering, search, ordering, list
stats, audit stamping and module permission enforcement come for free.
"""

from rest_framework import viewsets, filters
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.permissions import HasModulePermission
from apps.core.response import success_response


# ---------------------------------------------------------------------------
# Base ViewSet — wraps responses in the standard envelope
# ---------------------------------------------------------------------------

class StandardResponseMixin:
    """Wraps *non-paginated* responses in ``{success, message, data}``."""

    resource_name = None

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        # Only wrap when we have an actual dict/list and it hasn't been wrapped
        if (
            hasattr(response, 'data')
            and response.data is not None
            and not isinstance(response.data, bytes)
            and response.status_code < 400
        ):
            data = response.data
            # Already wrapped by paginator or exception handler
            if isinstance(data, dict) and 'success' in data:
                return response
            response.data = {
                'success': True,
                'message': self._get_success_message(request, response),
                'data': data,
            }
        return response

    def _get_success_message(self, request, response):
        name = self.resource_name or 'Record'
        messages = {
            'POST': f'{name} created successfully',
            'PUT': f'{name} updated successfully',
            'PATCH': f'{name} updated successfully',
            'DELETE': f'{name} deleted successfully',
        }
        return messages.get(request.method, 'OK')


class ListStatsMixin:
    """
    Adds a ``stats`` block to list responses.

    Subclasses implement ``get_stats(queryset)``; the queryset passed in is
    the unfiltered base queryset so counters describe the whole collection.
    """

    def get_stats(self, queryset):
        return None

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        stats = self.get_stats(self.get_queryset())
        if stats is None:
            return response
        if isinstance(response.data, dict) and 'success' in response.data:
            response.data['stats'] = stats
        else:
            response.data = {
                'success': True,
                'message': 'OK',
                'data': response.data,
                'stats': stats,
            }
        return response


def active_stats(queryset, prefix):
    """The total/active/inactive counters most entities report."""
    total = queryset.count()
    active = queryset.filter(is_active=True).count()
    return {
        f'total_{prefix}': total,
        f'active_{prefix}': active,
        f'inactive_{prefix}': total - active,
    }


# ---------------------------------------------------------------------------
# HRMS ModelViewSet — the backbone for every HRMS app
# ---------------------------------------------------------------------------

class HRMSModelViewSet(
    StandardResponseMixin,
    ListStatsMixin,
    viewsets.ModelViewSet,
):
    """
    ModelViewSet with built-in:

    • **Permission enforcement** — ``permission_module`` checked per action
      via ``HasModulePermission``.
    • **Pagination / filter / search / ordering** — ``DjangoFilterBackend``,
      ``SearchFilter`` and ``OrderingFilter``.
    • **List stats** — ``get_stats`` via ``ListStatsMixin``.
    • **Audit stamping** — ``created_by`` / ``updated_by`` from the request user.
    • **Standard response envelope** — via ``StandardResponseMixin``.
    """

    permission_classes = [IsAuthenticated, HasModulePermission]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    ordering = ['-created_at']

    # -- Subclasses SHOULD set these ----------------------------------------
    # queryset = MyModel.objects.all()
    # serializer_class = MySerializer
    # filterset_class = MyFilter
    # search_fields = [...]
    # permission_module = 'my_module'
    # resource_name = 'My entity'

    # -- Optional: separate list / detail serializers -----------------------
    list_serializer_class = None
    detail_serializer_class = None

    def get_serializer_class(self):
        if self.action == 'list' and self.list_serializer_class:
            return self.list_serializer_class
        if self.action == 'retrieve' and self.detail_serializer_class:
            return self.detail_serializer_class
        return super().get_serializer_class()

    def perform_create(self, serializer):
        kwargs = {}
        if hasattr(serializer.Meta.model, 'created_by_id'):
            kwargs['created_by'] = self.request.user
            kwargs['updated_by'] = self.request.user
        serializer.save(**kwargs)

    def perform_update(self, serializer):
        kwargs = {}
        if hasattr(serializer.Meta.model, 'updated_by_id'):
            kwargs['updated_by'] = self.request.user
        serializer.save(**kwargs)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return success_response(
            data=None,
            message=f'{self.resource_name or "Record"} deleted successfully',
        )
