"""
Leave URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import LeaveApplicationViewSet, LeaveBalanceViewSet, LeaveTypeViewSet

router = DefaultRouter()
router.register(r'types', LeaveTypeViewSet, basename='leave-type')
router.register(r'balances', LeaveBalanceViewSet, basename='leave-balance')
router.register(r'applications', LeaveApplicationViewSet, basename='leave-application')

urlpatterns = [
    path('', include(router.urls)),
]
