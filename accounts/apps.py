"""
Accounts app configuration.

This app manages identities (clients and developers) and developer profiles,
plus signup, login and profile endpoints.
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Configuration for the accounts app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Accounts'
