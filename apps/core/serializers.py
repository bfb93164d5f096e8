"""
Shared serializer building blocks.
"""

from rest_framework import serializers

from .exceptions import DuplicateResourceException


class UniqueFieldsMixin:
    """
    Case-insensitive uniqueness checks with readable messages.

    Declare ``unique_fields = ('code', 'name')`` and ``resource_label`` on the
    serializer; a clash raises "<label> <field> already exists". DRF's own
    ``UniqueValidator`` is disabled for those fields so this check owns them.
    """

    unique_fields = ()
    resource_label = None

    def get_extra_kwargs(self):
        extra_kwargs = super().get_extra_kwargs()
        for field in self.unique_fields:
            kwargs = dict(extra_kwargs.get(field, {}))
            kwargs.setdefault('validators', [])
            extra_kwargs[field] = kwargs
        return extra_kwargs

    def validate(self, attrs):
        attrs = super().validate(attrs)
        queryset = self.Meta.model.objects.all()
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        label = self.resource_label or self.Meta.model._meta.verbose_name.capitalize()
        for field in self.unique_fields:
            value = attrs.get(field)
            if value in (None, ''):
                continue
            if queryset.filter(**{f'{field}__iexact': value}).exists():
                raise DuplicateResourceException(label, field)
        return attrs


class UserSummarySerializer(serializers.Serializer):
    """Compact ``{id, name, email}`` view of a user reference."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(source='full_name', read_only=True)
    email = serializers.EmailField(read_only=True)


class EmployeeSummarySerializer(serializers.Serializer):
    """Compact view of an employee reference used inside other payloads."""

    id = serializers.UUIDField(read_only=True)
    employee_id = serializers.CharField(read_only=True)
    name = serializers.CharField(source='full_name', read_only=True)
    email = serializers.EmailField(read_only=True)
