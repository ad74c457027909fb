"""
Accounts Permissions - Role-based permission classes.

ROLE-BASED:
- IsClient: role ``user`` (project posters)
- IsDeveloper: role ``developer`` with a developer profile

Both return 401 for anonymous requests (DRF raises NotAuthenticated when a
permission fails for an unauthenticated user) and 403 otherwise.
"""

import logging

from rest_framework import permissions

logger = logging.getLogger(__name__)


class IsClient(permissions.BasePermission):
    """
    Permission check for client accounts.

    Requires:
    - User to be authenticated
    - User role to be ``user``
    """
    message = "User access required. Only users can post projects."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_client


class IsDeveloper(permissions.BasePermission):
    """
    Permission check for developer accounts.

    Requires:
    - User to be authenticated
    - User role to be ``developer``
    - A DeveloperProfile attached to the user
    """
    message = "Developer access required"

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        if not user.is_developer:
            return False

        if user.developer_profile_or_none is None:
            logger.warning(f"Developer {user.id} has no developer profile")
            self.message = "Developer profile not found"
            return False

        return True
