"""
Authentication URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

from .views import (
    CustomTokenObtainPairView, LogoutView, PasswordChangeView, ProfileView,
    RoleViewSet, UserViewSet,
)

router = DefaultRouter()
router.register('roles', RoleViewSet, basename='auth-roles')
router.register('users', UserViewSet, basename='auth-users')

urlpatterns = [
    path('', include(router.urls)),
    # Token management
    path('login/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('token/verify/', TokenVerifyView.as_view(), name='token_verify'),

    # Profile
    path('me/', ProfileView.as_view(), name='profile'),
    path('password/change/', PasswordChangeView.as_view(), name='change_password'),
]
