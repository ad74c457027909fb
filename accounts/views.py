"""
Accounts Views - Authentication APIViews.

This module provides REST API endpoints for:
- Client signup (role ``user``)
- Developer signup (role ``developer`` with profile)
- Login (email + password)
- Current user profile
"""

import logging

from django.contrib.auth.models import update_last_login
from rest_framework import permissions, status, views
from rest_framework.response import Response
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import (
    DeveloperSignupSerializer,
    LoginSerializer,
    UserSerializer,
    UserSignupSerializer,
)

logger = logging.getLogger(__name__)


def _auth_payload(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {
        'user': UserSerializer(user).data,
        'tokens': {
            'access': str(refresh.access_token),
            'refresh': str(refresh),
        }
    }


class SignupUserView(views.APIView):
    """
    Client signup endpoint.

    POST: Create a ``user`` account and return tokens.
    """
    permission_classes = [permissions.AllowAny]
    serializer_class = UserSignupSerializer

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(_auth_payload(user), status=status.HTTP_201_CREATED)


class SignupDeveloperView(SignupUserView):
    """
    Developer signup endpoint.

    POST: Create a ``developer`` account plus DeveloperProfile and return tokens.
    """
    serializer_class = DeveloperSignupSerializer


class LoginView(views.APIView):
    """
    User login endpoint.

    POST: Authenticate by email/password and return tokens.
    """
    permission_classes = [permissions.AllowAny]
    serializer_class = LoginSerializer

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        if jwt_settings.UPDATE_LAST_LOGIN:
            update_last_login(None, user)
        logger.info(f"User {user.uuid} logged in")

        return Response(_auth_payload(user))


class ProfileView(views.APIView):
    """
    Current authenticated user endpoint.

    GET: Account details with developer profile (null for clients).
    """
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = UserSerializer

    def get(self, request):
        return Response({'user': UserSerializer(request.user).data})
