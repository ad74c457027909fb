"""
Bids app configuration.

This app manages developer bids on projects and the workflow that accepts,
rejects and withdraws them.
"""

from django.apps import AppConfig


class BidsConfig(AppConfig):
    """Configuration for the bids app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'bids'
    verbose_name = 'Bids'
