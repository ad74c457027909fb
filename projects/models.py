"""
Projects Models - Client project postings.

This module defines:
- Project: A mission posted by a client, open for bids until one is accepted

A project is mutable (update/delete) only while ``open``. Its status moves to
``in-progress`` exclusively through bid acceptance in ``bids.workflow``;
``completed`` and ``cancelled`` exist as states but no operation reaches them.
"""

import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel


class Timeline(models.TextChoices):
    """Delivery windows shared by projects and bids."""
    ONE_TO_TWO_WEEKS = '1-2 weeks', _('1-2 weeks')
    TWO_TO_FOUR_WEEKS = '2-4 weeks', _('2-4 weeks')
    ONE_TO_TWO_MONTHS = '1-2 months', _('1-2 months')
    TWO_TO_SIX_MONTHS = '2-6 months', _('2-6 months')
    SIX_PLUS_MONTHS = '6+ months', _('6+ months')


class Project(TimestampedModel):
    """
    Client-posted project with budget range and timeline.

    Developers bid while the project is open; accepting one bid assigns
    ``selected_developer`` and moves the project to in-progress.
    """

    class Category(models.TextChoices):
        WEB_DEVELOPMENT = 'web-development', _('Web Development')
        MOBILE_DEVELOPMENT = 'mobile-development', _('Mobile Development')
        DESIGN = 'design', _('Design')
        DATA_SCIENCE = 'data-science', _('Data Science')
        AI_ML = 'ai-ml', _('AI / ML')
        DEVOPS = 'devops', _('DevOps')
        OTHER = 'other', _('Other')

    class Complexity(models.TextChoices):
        SIMPLE = 'simple', _('Simple')
        MODERATE = 'moderate', _('Moderate')
        COMPLEX = 'complex', _('Complex')
        EXPERT = 'expert', _('Expert')

    class Status(models.TextChoices):
        OPEN = 'open', _('Open for Bids')
        IN_PROGRESS = 'in-progress', _('In Progress')
        COMPLETED = 'completed', _('Completed')
        CANCELLED = 'cancelled', _('Cancelled')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='projects'
    )

    # Basic info
    title = models.CharField(max_length=100)
    description = models.TextField(
        max_length=2000,
        help_text=_('Detailed project description, goals, and expectations')
    )

    # Classification
    category = models.CharField(max_length=30, choices=Category.choices)
    skills = models.JSONField(
        default=list,
        blank=True,
        help_text=_('Array of required skill keywords')
    )
    complexity = models.CharField(
        max_length=20,
        choices=Complexity.choices,
        default=Complexity.MODERATE
    )

    # Budget
    budget_min = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    budget_max = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    budget_currency = models.CharField(max_length=3, default='USD')

    # Timeline
    timeline = models.CharField(max_length=20, choices=Timeline.choices)
    deadline = models.DateTimeField(help_text=_('Must be in the future when posted'))

    # Scope
    requirements = models.JSONField(default=list, blank=True)
    deliverables = models.JSONField(
        default=list,
        blank=True,
        help_text=_('Array of expected deliverables')
    )
    attachments = models.JSONField(
        default=list,
        blank=True,
        help_text=_('Array of attachment file URLs')
    )

    # Status and assignment
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.OPEN
    )
    selected_developer = models.ForeignKey(
        'accounts.DeveloperProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_projects'
    )

    class Meta:
        verbose_name = _('Project')
        verbose_name_plural = _('Projects')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'category'], name='project_status_cat_idx'),
            models.Index(fields=['owner', 'status'], name='project_owner_status_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(budget_min__lte=models.F('budget_max')),
                name='project_budget_min_lte_max',
            ),
        ]

    def __str__(self):
        return self.title

    @property
    def is_open(self):
        return self.status == self.Status.OPEN

    @property
    def budget(self):
        return {
            'min': self.budget_min,
            'max': self.budget_max,
            'currency': self.budget_currency,
        }
