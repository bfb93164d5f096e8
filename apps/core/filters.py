"""Core filter base classes."""
import django_filters


class ActiveFilterSet(django_filters.FilterSet):
    """Base FilterSet exposing the ``is_active`` flag every HRMS model carries."""

    is_active = django_filters.BooleanFilter()
    created_after = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='gte')
    created_before = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='lte')
