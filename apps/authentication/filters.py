"""Authentication filters."""
import django_filters

from apps.core.filters import ActiveFilterSet
from .models import Role, User


class RoleFilter(ActiveFilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = Role
        fields = ['name', 'code', 'is_active']


class UserFilter(django_filters.FilterSet):
    is_active = django_filters.BooleanFilter()
    role = django_filters.UUIDFilter()
    email = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = User
        fields = ['is_active', 'role', 'email']
