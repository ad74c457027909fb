"""
Project-level views: health check and JSON error handlers.

The whole application is a JSON API, so Django's default HTML error pages are
replaced by JSON bodies shaped like the DRF exception handler output.
"""

import logging

from django.conf import settings
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for load balancers and monitoring.
    Returns 503 when the database cannot be reached.
    """
    health_status = {
        'status': 'OK',
        'message': 'DevConnect API is running',
        'timestamp': timezone.now().isoformat(),
        'version': getattr(settings, 'APP_VERSION', '1.0.0'),
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        health_status['database'] = 'connected'
    except Exception as e:
        logger.error(f"Health check database error: {e}")
        health_status['database'] = 'error'
        health_status['status'] = 'DEGRADED'

    status_code = 200 if health_status['status'] == 'OK' else 503
    return JsonResponse(health_status, status=status_code)


def _error_body(message, error_code):
    return {
        'success': False,
        'data': None,
        'message': message,
        'error_code': error_code,
        'errors': [],
        'meta': {
            'timestamp': timezone.now().isoformat(),
        },
    }


def custom_404_handler(request, exception=None):
    """Route not found."""
    return JsonResponse(_error_body('Route not found', 'NOT_FOUND'), status=404)


def custom_500_handler(request):
    """Unhandled error outside of DRF views."""
    return JsonResponse(
        _error_body('An unexpected error occurred.', 'INTERNAL_ERROR'),
        status=500,
    )
