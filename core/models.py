"""
Core Models - Base classes for all apps

This module provides reusable base model classes used across the application:
- TimestampedModel: Adds created_at/updated_at timestamps
"""

from django.db import models


class TimestampedModel(models.Model):
    """
    Abstract base class that adds timestamp fields.

    Provides:
    - created_at: Automatically set on creation
    - updated_at: Automatically updated on save

    Note that queryset ``update()`` calls bypass ``auto_now``; callers doing
    guarded updates set ``updated_at`` explicitly.

    Usage:
        class MyModel(TimestampedModel):
            # your fields here
            pass
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text='Timestamp when record was created'
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text='Timestamp when record was last updated'
    )

    class Meta:
        abstract = True
        get_latest_by = 'created_at'
        ordering = ['-created_at']
