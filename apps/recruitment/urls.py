"""Recruitment URLs"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AttachmentTypeViewSet, CandidateViewSet, HiringStageViewSet, JobPostingViewSet

router = DefaultRouter()
router.register(r'attachment-types', AttachmentTypeViewSet, basename='attachment-type')
router.register(r'hiring-stages', HiringStageViewSet, basename='hiring-stage')
router.register(r'job-postings', JobPostingViewSet, basename='job-posting')
router.register(r'candidates', CandidateViewSet, basename='candidate')

urlpatterns = [
    path('', include(router.urls)),
]
