"""
Accounts Models - Identity and developer profiles.

Models:
- User: Account record (credentials, role). Email is the login name.
- DeveloperProfile: Per-developer attributes, one per developer account.

Clients (role ``user``) post projects; developers (role ``developer``) bid on
them. Every developer account owns exactly one DeveloperProfile, created at
signup in the same transaction as the User.
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel


def default_portfolio():
    return {
        'github': '',
        'linkedin': '',
        'website': '',
        'projects': [],
    }


class User(AbstractUser):
    """
    Core user model.

    Uses email for login; username stays unique and public-facing.
    """

    class Role(models.TextChoices):
        USER = 'user', _('User')
        DEVELOPER = 'developer', _('Developer')

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        db_index=True,
        help_text=_('Public identifier for this user')
    )

    username = models.CharField(
        max_length=30,
        unique=True,
        validators=[MinLengthValidator(3)],
        help_text=_('3-30 characters')
    )
    email = models.EmailField(
        unique=True,
        help_text=_('Email address (used for login)')
    )
    full_name = models.CharField(max_length=150)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
        db_index=True
    )

    profile_picture = models.CharField(max_length=500, blank=True, default='')
    bio = models.TextField(max_length=500, blank=True, default='')
    location = models.CharField(max_length=200, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Use email as username
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @property
    def is_developer(self):
        return self.role == self.Role.DEVELOPER

    @property
    def is_client(self):
        return self.role == self.Role.USER

    @property
    def developer_profile_or_none(self):
        """Return the developer profile, or None for clients."""
        try:
            return self.developer_profile
        except DeveloperProfile.DoesNotExist:
            return None


class DeveloperProfile(TimestampedModel):
    """
    Developer attributes, keyed 1:1 to a developer account.

    Bids and project assignments reference the profile, not the User.
    """

    class Experience(models.TextChoices):
        ENTRY = 'entry', _('Entry')
        INTERMEDIATE = 'intermediate', _('Intermediate')
        SENIOR = 'senior', _('Senior')
        EXPERT = 'expert', _('Expert')

    class Availability(models.TextChoices):
        AVAILABLE = 'available', _('Available')
        BUSY = 'busy', _('Busy')
        UNAVAILABLE = 'unavailable', _('Unavailable')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='developer_profile'
    )

    skills = models.JSONField(
        default=list,
        blank=True,
        help_text=_('Array of skill keywords')
    )
    experience = models.CharField(
        max_length=20,
        choices=Experience.choices,
        default=Experience.ENTRY
    )
    years_of_experience = models.PositiveIntegerField(default=0)
    hourly_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)]
    )
    portfolio = models.JSONField(
        default=default_portfolio,
        blank=True,
        help_text=_('github/linkedin/website links and showcase projects')
    )
    availability = models.CharField(
        max_length=20,
        choices=Availability.choices,
        default=Availability.AVAILABLE
    )

    # Stats
    completed_projects = models.PositiveIntegerField(default=0)
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(5)]
    )
    total_reviews = models.PositiveIntegerField(default=0)

    specializations = models.JSONField(default=list, blank=True)
    languages = models.JSONField(default=list, blank=True)

    class Meta:
        verbose_name = _('Developer Profile')
        verbose_name_plural = _('Developer Profiles')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['experience', 'availability'], name='devprofile_exp_avail_idx'),
        ]

    def __str__(self):
        return f"Developer {self.user.username}"
