"""
Employee Serializers
"""

from rest_framework import serializers

from apps.core.serializers import UniqueFieldsMixin
from .models import Employee, Department, Designation


class DepartmentSerializer(UniqueFieldsMixin, serializers.ModelSerializer):
    unique_fields = ('code',)
    resource_label = 'Department'

    employee_count = serializers.SerializerMethodField()
    parent_name = serializers.CharField(source='parent.name', read_only=True, default=None)
    manager_name = serializers.CharField(source='manager.full_name', read_only=True, default=None)

    class Meta:
        model = Department
        fields = [
            'id', 'name', 'code', 'description', 'parent', 'parent_name',
            'manager', 'manager_name', 'employee_count', 'is_active',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_employee_count(self, obj):
        return obj.employees.filter(is_active=True).count()

    def validate_code(self, value):
        return value.strip().upper()

    def validate(self, attrs):
        attrs = super().validate(attrs)
        parent = attrs.get('parent')
        if parent is not None and self.instance is not None and parent.pk == self.instance.pk:
            raise serializers.ValidationError({'parent': 'Department cannot be its own parent'})
        return attrs


class DesignationSerializer(UniqueFieldsMixin, serializers.ModelSerializer):
    unique_fields = ('name', 'code')
    resource_label = 'Designation'

    department_name = serializers.CharField(source='department.name', read_only=True, default=None)
    employee_count = serializers.SerializerMethodField()

    class Meta:
        model = Designation
        fields = [
            'id', 'name', 'code', 'description', 'department', 'department_name',
            'level', 'grade', 'employee_count', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_employee_count(self, obj):
        return obj.employees.filter(is_active=True).count()

    def validate_code(self, value):
        return value.strip().upper()


class EmployeeListSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    department_name = serializers.CharField(source='department.name', read_only=True, default=None)
    designation_name = serializers.CharField(source='designation.name', read_only=True, default=None)

    class Meta:
        model = Employee
        fields = [
            'id', 'employee_id', 'full_name', 'email', 'phone',
            'department', 'department_name', 'designation', 'designation_name',
            'employment_status', 'date_of_joining', 'is_active',
        ]


class EmployeeSerializer(UniqueFieldsMixin, serializers.ModelSerializer):
    unique_fields = ('employee_id', 'email')
    resource_label = 'Employee'

    full_name = serializers.CharField(read_only=True)
    department_name = serializers.CharField(source='department.name', read_only=True, default=None)
    designation_name = serializers.CharField(source='designation.name', read_only=True, default=None)
    reporting_manager_name = serializers.CharField(
        source='reporting_manager.full_name', read_only=True, default=None
    )
    shift_name = serializers.CharField(source='shift.name', read_only=True, default=None)

    class Meta:
        model = Employee
        fields = [
            'id', 'user', 'employee_id', 'first_name', 'last_name', 'full_name',
            'email', 'phone', 'date_of_birth', 'gender', 'address',
            'department', 'department_name', 'designation', 'designation_name',
            'reporting_manager', 'reporting_manager_name', 'shift', 'shift_name',
            'employment_type', 'employment_status', 'date_of_joining', 'date_of_exit',
            'basic_salary', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        attrs = super().validate(attrs)
        manager = attrs.get('reporting_manager')
        if manager is not None and self.instance is not None and manager.pk == self.instance.pk:
            raise serializers.ValidationError({'reporting_manager': 'Employee cannot report to themselves'})

        joining = attrs.get('date_of_joining', getattr(self.instance, 'date_of_joining', None))
        exit_date = attrs.get('date_of_exit', getattr(self.instance, 'date_of_exit', None))
        if joining and exit_date and exit_date < joining:
            raise serializers.ValidationError({'date_of_exit': 'Exit date cannot be before joining date'})
        return attrs
