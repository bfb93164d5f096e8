"""
Attendance URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AttendanceViewSet, PunchStatusView, PunchView, ShiftViewSet

router = DefaultRouter()
router.register(r'shifts', ShiftViewSet, basename='shift')
router.register(r'records', AttendanceViewSet, basename='attendance')

urlpatterns = [
    path('', include(router.urls)),
    path('punch/', PunchView.as_view(), name='attendance-punch'),
    path('punch-status/', PunchStatusView.as_view(), name='attendance-punch-status'),
]
