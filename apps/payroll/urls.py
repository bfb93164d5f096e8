"""
Payroll URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import PayrollProcessingViewSet, SalarySlipViewSet, SalaryStructureViewSet

router = DefaultRouter()
router.register(r'salary-structures', SalaryStructureViewSet, basename='salary-structure')
router.register(r'processing', PayrollProcessingViewSet, basename='payroll-processing')
router.register(r'salary-slips', SalarySlipViewSet, basename='salary-slip')

urlpatterns = [
    path('', include(router.urls)),
]
