"""
Permission classes - module/action RBAC enforcement

Permission codes follow ``<module>_<action>``, e.g. ``leave_application_update``.
A role holding ``*`` is granted everything; superusers bypass all checks.
"""

from rest_framework.permissions import BasePermission


ACTION_OPERATIONS = {
    'list': 'read',
    'retrieve': 'read',
    'create': 'create',
    'update': 'update',
    'partial_update': 'update',
    'destroy': 'delete',
    'approve': 'update',
    'reject': 'update',
    'cancel': 'update',
    'move_stage': 'update',
    'dropdown': 'read',
}


def permission_code(module, operation):
    return f'{module}_{operation}'


class HasModulePermission(BasePermission):
    """
    DRF permission class for module-scoped permission codes.

    Usage in ViewSet:
        permission_classes = [IsAuthenticated, HasModulePermission]
        permission_module = 'leave_application'
        action_permissions = {'punch': 'create'}   # optional overrides
    """

    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        if user.is_superuser:
            return True

        module = getattr(view, 'permission_module', None)
        if not module:
            return True

        action = getattr(view, 'action', None)
        overrides = getattr(view, 'action_permissions', {}) or {}
        operation = overrides.get(action) or ACTION_OPERATIONS.get(action)
        if operation is None:
            # Plain APIViews dispatch on the HTTP method
            operation = 'read' if request.method in ('GET', 'HEAD', 'OPTIONS') else 'update'

        code = permission_code(module, operation)
        if not user.has_permission_for(code):
            self.message = f'Permission required: {code}'
            return False
        return True

