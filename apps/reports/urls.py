"""Reports URLs"""
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ReportViewSet

router = SimpleRouter()
router.register(r'', ReportViewSet, basename='reports')

urlpatterns = [
    path('', include(router.urls)),
]
