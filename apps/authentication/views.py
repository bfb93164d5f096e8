"""
Authentication Views
"""

import logging

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError
from django.db.models import Q
from django.utils import timezone

from apps.core.response import success_response
from apps.core.viewsets import HRMSModelViewSet, active_stats
from .filters import RoleFilter, UserFilter
from .models import Role, User
from .serializers import (
    CustomTokenObtainPairSerializer,
    LogoutSerializer,
    PasswordChangeSerializer,
    RoleSerializer,
    UserCreateSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


# =====================================================
# LOGIN
# =====================================================

class CustomTokenObtainPairView(TokenObtainPairView):
    """Email/password login returning an access/refresh pair and the user profile."""

    permission_classes = [AllowAny]
    serializer_class = CustomTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == status.HTTP_200_OK:
            User.objects.filter(email__iexact=request.data.get('email')).update(
                last_login=timezone.now()
            )
            logger.info("Login succeeded email=%s", request.data.get('email'))
            return success_response(data=response.data, message='Login successful')
        return response


# =====================================================
# LOGOUT
# =====================================================

class LogoutView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = LogoutSerializer

    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        refresh_token = serializer.validated_data.get('refresh_token')

        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as exc:
                logger.info("Logout with unusable refresh token user=%s: %s", request.user.id, exc)

        return success_response(message='Logged out successfully')


# =====================================================
# PROFILE
# =====================================================

class ProfileView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    def get(self, request):
        serializer = UserSerializer(request.user)
        return success_response(data=serializer.data)


class PasswordChangeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = PasswordChangeSerializer

    def post(self, request):
        serializer = PasswordChangeSerializer(
            data=request.data,
            context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response(message='Password changed successfully')


# =====================================================
# ROLES & USERS
# =====================================================

class RoleViewSet(HRMSModelViewSet):
    queryset = Role.objects.all()
    serializer_class = RoleSerializer
    filterset_class = RoleFilter
    search_fields = ['name', 'code', 'description']
    ordering_fields = ['name', 'code', 'created_at']
    permission_module = 'role'
    resource_name = 'Role'

    def get_stats(self, queryset):
        return active_stats(queryset, 'roles')


class UserViewSet(HRMSModelViewSet):
    queryset = User.objects.select_related('role')
    serializer_class = UserSerializer
    filterset_class = UserFilter
    search_fields = ['email', 'first_name', 'last_name']
    ordering_fields = ['email', 'first_name', 'date_joined']
    ordering = ['email']
    permission_module = 'user'
    resource_name = 'User'

    def get_serializer_class(self):
        if self.action == 'create':
            return UserCreateSerializer
        return super().get_serializer_class()

    def get_stats(self, queryset):
        total = queryset.count()
        active = queryset.filter(is_active=True).count()
        return {
            'total_users': total,
            'active_users': active,
            'inactive_users': total - active,
            'users_without_role': queryset.filter(Q(role__isnull=True)).count(),
        }
