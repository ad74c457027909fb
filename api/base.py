"""
API Base Classes - Shared foundation for DevConnect API views

This module provides:
- PageLimitPagination: ``page``/``limit`` pagination with the list envelope
  used by every list endpoint
- message_response: ``{"message": ..., <key>: data}`` responses returned by
  workflow actions

List responses follow this structure:
{
    "items": [...],
    "pagination": {
        "currentPage": int,
        "totalPages": int,
        "totalItems": int,
        "hasNextPage": bool,
        "hasPrevPage": bool
    }
}
"""

import math
from typing import Any, Optional

from rest_framework import status
from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _positive_int(value, default: int, maximum: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    if maximum is not None:
        return min(number, maximum)
    return number


# =============================================================================
# PAGINATION CLASSES
# =============================================================================

class PageLimitPagination(BasePagination):
    """
    Page-number pagination driven by ``page`` and ``limit`` query params.

    Query params:
    - page: Page number (1-indexed, default: 1)
    - limit: Items per page (default: 10, max: 100)

    Invalid or non-positive values fall back to the defaults. Pages past the
    end return an empty ``items`` list rather than a 404.
    """

    page_query_param = 'page'
    limit_query_param = 'limit'
    default_limit = 10
    max_limit = 100

    def paginate_queryset(self, queryset, request, view=None):
        self.page = _positive_int(request.query_params.get(self.page_query_param), 1)
        self.limit = _positive_int(
            request.query_params.get(self.limit_query_param),
            self.default_limit,
            self.max_limit,
        )
        self.total = queryset.count()

        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_pagination_info(self) -> dict:
        return {
            'currentPage': self.page,
            'totalPages': math.ceil(self.total / self.limit),
            'totalItems': self.total,
            'hasNextPage': self.page * self.limit < self.total,
            'hasPrevPage': self.page > 1,
        }

    def get_paginated_response(self, data):
        return Response({
            'items': data,
            'pagination': self.get_pagination_info(),
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'required': ['items', 'pagination'],
            'properties': {
                'items': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'currentPage': {'type': 'integer', 'example': 1},
                        'totalPages': {'type': 'integer', 'example': 3},
                        'totalItems': {'type': 'integer', 'example': 25},
                        'hasNextPage': {'type': 'boolean'},
                        'hasPrevPage': {'type': 'boolean'},
                    },
                },
            },
        }

    def get_schema_operation_parameters(self, view):
        return [
            {
                'name': self.page_query_param,
                'required': False,
                'in': 'query',
                'description': 'Page number (1-indexed).',
                'schema': {'type': 'integer'},
            },
            {
                'name': self.limit_query_param,
                'required': False,
                'in': 'query',
                'description': f'Items per page (max {self.max_limit}).',
                'schema': {'type': 'integer'},
            },
        ]


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

def message_response(
    message: str,
    key: str = None,
    data: Any = None,
    status_code: int = status.HTTP_200_OK
) -> Response:
    """Build a ``{"message": ..., key: data}`` response."""
    body = {'message': message}
    if key is not None:
        body[key] = data
    return Response(body, status=status_code)
