"""
Accounts Serializers - DRF serializers for signup, login and profiles.

This module provides serializers for:
- User and DeveloperProfile read representations
- Compact summaries embedded in project and bid payloads
- Client and developer signup
- Email/password login
"""

import logging

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from api.exceptions import AuthenticationFailedError, InvalidInputError

from .models import DeveloperProfile

logger = logging.getLogger(__name__)

User = get_user_model()


# ==================== READ SERIALIZERS ====================

class UserSummarySerializer(serializers.ModelSerializer):
    """Minimal user information for nested serialization."""

    class Meta:
        model = User
        fields = ['uuid', 'username', 'full_name', 'email']
        read_only_fields = fields


class DeveloperProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeveloperProfile
        fields = [
            'uuid', 'skills', 'experience', 'years_of_experience',
            'hourly_rate', 'portfolio', 'availability',
            'completed_projects', 'rating', 'total_reviews',
            'specializations', 'languages',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class DeveloperSummarySerializer(serializers.ModelSerializer):
    """Developer profile with its account, as embedded in bids and projects."""
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = DeveloperProfile
        fields = ['uuid', 'user', 'skills', 'experience', 'hourly_rate', 'rating']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """
    Full account representation returned by signup, login and profile.

    ``developer_profile`` is null for client accounts.
    """
    developer_profile = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'uuid', 'username', 'email', 'full_name', 'role',
            'profile_picture', 'bio', 'location',
            'developer_profile',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_developer_profile(self, obj):
        profile = obj.developer_profile_or_none
        if profile is None:
            return None
        return DeveloperProfileSerializer(profile).data


# ==================== SIGNUP SERIALIZERS ====================

class UserSignupSerializer(serializers.ModelSerializer):
    """
    Client signup serializer with password validation.

    Creates an account with role ``user``.
    """
    account_role = User.Role.USER

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'full_name', 'bio', 'location']
        extra_kwargs = {
            # Uniqueness is checked case-insensitively in validate_email/validate_username
            'email': {'required': True, 'validators': []},
            'username': {'min_length': 3, 'max_length': 30, 'validators': []},
            'full_name': {'required': True, 'allow_blank': False},
        }

    def validate_email(self, value):
        """Ensure email is unique."""
        value = value.strip().lower()
        if User.objects.filter(email=value).exists():
            raise InvalidInputError(
                detail=str(_("User already exists with this email or username")),
                field_name='email'
            )
        return value

    def validate_username(self, value):
        if User.objects.filter(username=value).exists():
            raise InvalidInputError(
                detail=str(_("User already exists with this email or username")),
                field_name='username'
            )
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User.objects.create_user(
            password=password,
            role=self.account_role,
            **validated_data
        )
        logger.info(f"Created {user.role} account {user.uuid}")
        return user


class DeveloperSignupSerializer(UserSignupSerializer):
    """
    Developer signup serializer.

    Creates the account and its DeveloperProfile in one transaction.
    """
    account_role = User.Role.DEVELOPER

    skills = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
        default=list
    )
    experience = serializers.ChoiceField(
        choices=DeveloperProfile.Experience.choices,
        required=False,
        default=DeveloperProfile.Experience.ENTRY
    )
    years_of_experience = serializers.IntegerField(required=False, default=0, min_value=0)
    hourly_rate = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        required=False,
        default=0,
        min_value=0
    )
    portfolio = serializers.DictField(required=False)

    class Meta(UserSignupSerializer.Meta):
        fields = UserSignupSerializer.Meta.fields + [
            'skills', 'experience', 'years_of_experience', 'hourly_rate', 'portfolio',
        ]

    profile_fields = ('skills', 'experience', 'years_of_experience', 'hourly_rate', 'portfolio')

    def create(self, validated_data):
        profile_data = {
            field: validated_data.pop(field)
            for field in self.profile_fields
            if field in validated_data
        }
        with transaction.atomic():
            user = super().create(validated_data)
            DeveloperProfile.objects.create(user=user, **profile_data)
        return user


# ==================== LOGIN SERIALIZER ====================

class LoginSerializer(serializers.Serializer):
    """Email/password login; resolves ``validated_data['user']``."""
    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get('request'),
            username=attrs['email'].strip().lower(),
            password=attrs['password']
        )
        if not user:
            raise AuthenticationFailedError(detail=str(_("Invalid email or password")))

        attrs['user'] = user
        return attrs
