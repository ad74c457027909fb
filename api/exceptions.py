"""
API Exceptions - Custom Exception Classes for DevConnect API

This module provides the error taxonomy used across the API:
- InvalidInputError (400): missing or malformed input
- AuthenticationFailedError (401): bad credentials or token
- PermissionDeniedError (403): caller may not act on the resource
- ResourceNotFoundError (404): referenced record does not exist
- ConflictError (400): business-rule violation, e.g. wrong status
- anything else (500): unexpected storage/runtime failure

All errors leave the API in a consistent format:
{
    "success": false,
    "data": null,
    "message": "Human-readable message",
    "error_code": "MACHINE_READABLE_CODE",
    "errors": [...],
    "meta": {...}
}
"""

import logging
from typing import Any, Dict, List

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import IntegrityError
from django.db.models import ProtectedError
from django.http import Http404
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.db.exceptions import ConcurrentModificationError

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class DevConnectAPIException(APIException):
    """
    Base exception for all DevConnect API errors.

    Attributes:
        status_code: HTTP status code
        default_detail: Default error message
        default_code: Machine-readable error code
        error_code: Specific error code for this instance
        extra_data: Additional data to include in response meta
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("An unexpected error occurred.")
    default_code = "ERROR"

    def __init__(
        self,
        detail: str = None,
        code: str = None,
        extra_data: Dict = None,
        **kwargs
    ):
        self.error_code = code or self.default_code
        self.extra_data = extra_data or {}

        if detail is None:
            detail = str(self.default_detail)

        super().__init__(detail=detail, code=code)

    def get_full_details(self) -> Dict:
        """Get full error details for response."""
        return {
            'message': str(self.detail),
            'error_code': self.error_code,
            'extra_data': self.extra_data,
        }


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class ResourceNotFoundError(DevConnectAPIException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("The requested resource was not found.")
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str = None, resource_id: Any = None, **kwargs):
        detail = kwargs.pop('detail', None)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type
        if resource_id:
            extra_data['resource_id'] = str(resource_id)

        if detail is None:
            detail = f"{resource_type} not found" if resource_type else str(self.default_detail)

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class ConflictError(DevConnectAPIException):
    """
    Raised when a business rule forbids the operation in the current state.

    Reported as 400 like every other client-side rule violation; the
    ``error_code`` distinguishes it from malformed input.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("This operation cannot be performed on the resource in its current state.")
    default_code = "CONFLICT"

    def __init__(
        self,
        detail: str = None,
        current_state: str = None,
        required_state: str = None,
        **kwargs
    ):
        extra_data = kwargs.pop('extra_data', {})

        if current_state:
            extra_data['current_state'] = current_state
        if required_state:
            extra_data['required_state'] = required_state

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


# =============================================================================
# PERMISSION EXCEPTIONS
# =============================================================================

class PermissionDeniedError(DevConnectAPIException):
    """Raised when user doesn't have permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("You do not have permission to perform this action.")
    default_code = "PERMISSION_DENIED"


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class InvalidInputError(DevConnectAPIException):
    """Raised for general invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Invalid input provided.")
    default_code = "INVALID_INPUT"

    def __init__(self, detail: str = None, field_name: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if field_name:
            extra_data['field'] = field_name
        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationFailedError(DevConnectAPIException):
    """Raised when authentication fails."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Authentication failed.")
    default_code = "AUTHENTICATION_FAILED"


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def _format_validation_errors(detail) -> List[Dict]:
    if isinstance(detail, dict):
        return [
            {"field": field, "messages": msgs if isinstance(msgs, list) else [str(msgs)]}
            for field, msgs in detail.items()
        ]
    if isinstance(detail, list):
        return [{"field": "non_field_errors", "messages": [str(e) for e in detail]}]
    return [{"field": "non_field_errors", "messages": [str(detail)]}]


def _first_validation_message(detail) -> str:
    """Pull the first human-readable message out of a nested DRF error detail."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_validation_message(value)
    if isinstance(detail, list):
        for value in detail:
            return _first_validation_message(value)
    return str(detail) if detail else "Validation failed."


def devconnect_exception_handler(exc, context):
    """
    Custom exception handler for standardized error responses.

    Storage-level conflicts (ConcurrentModificationError, IntegrityError,
    ProtectedError) are reported as CONFLICT;
    anything DRF does not know how to render becomes a logged 500.
    """
    if isinstance(exc, ConcurrentModificationError):
        logger.warning(f"Concurrent modification rejected: {exc}")
        exc = ConflictError(detail=str(_("The resource was modified by another request. Please retry.")))
    elif isinstance(exc, ProtectedError):
        logger.warning(f"Protected delete rejected as conflict: {exc}")
        exc = ConflictError(detail=str(_("The resource is still referenced and cannot be deleted.")))
    elif isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error rejected as conflict: {exc}")
        exc = ConflictError(detail=str(_("A record with these details already exists.")))
    elif isinstance(exc, DjangoPermissionDenied):
        exc = PermissionDeniedError(detail=str(exc) or None)

    # Get the standard DRF response
    response = exception_handler(exc, context)

    # Handle unhandled exceptions
    if response is None:
        view = context.get('view')
        logger.exception(
            f"Unhandled exception in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
        )
        return Response(
            {
                "success": False,
                "data": None,
                "message": "An unexpected error occurred.",
                "error_code": "INTERNAL_ERROR",
                "errors": [],
                "meta": {
                    "timestamp": timezone.now().isoformat(),
                }
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    error_data = {
        "success": False,
        "data": None,
        "message": "",
        "error_code": "ERROR",
        "errors": [],
        "meta": {
            "timestamp": timezone.now().isoformat(),
        }
    }

    # Handle our custom exceptions
    if isinstance(exc, DevConnectAPIException):
        error_data["message"] = str(exc.detail)
        error_data["error_code"] = exc.error_code
        if exc.extra_data:
            error_data["meta"].update(exc.extra_data)

    # Handle DRF ValidationError
    elif isinstance(exc, ValidationError):
        error_data["error_code"] = "VALIDATION_ERROR"
        error_data["errors"] = _format_validation_errors(exc.detail)
        error_data["message"] = _first_validation_message(exc.detail)

    # Django's Http404 raised by get_object_or_404
    elif isinstance(exc, Http404):
        error_data["message"] = "Resource not found"
        error_data["error_code"] = "NOT_FOUND"

    # Handle other DRF exceptions
    else:
        error_data["message"] = _first_validation_message(exc.detail) if hasattr(exc, 'detail') else str(exc)
        error_data["error_code"] = getattr(exc, 'default_code', 'ERROR')

    response.data = error_data
    return response
