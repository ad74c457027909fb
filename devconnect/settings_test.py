"""
Django Test Settings for DevConnect Lite

This module contains test-specific settings that override the main settings
for faster and more isolated test execution.

Usage:
    pytest --ds=devconnect.settings_test
    python manage.py test --settings=devconnect.settings_test
"""

import tempfile
from pathlib import Path

from .settings import *  # noqa: F401, F403

# =============================================================================
# TEST ENVIRONMENT CONFIGURATION
# =============================================================================

DEBUG = False
TESTING = True

SECRET_KEY = 'devconnect-test-secret-key-not-for-production'

# Use a faster password hasher for tests
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================

TEST_DB_DIR = Path(tempfile.mkdtemp())

# File-backed SQLite unless TEST_DATABASE_URL points at a real server
DATABASES = {
    'default': env.db(  # noqa: F405
        'TEST_DATABASE_URL',
        default=f'sqlite:///{TEST_DB_DIR / "devconnect.sqlite3"}'
    ),
}

if DATABASES['default']['ENGINE'] == 'django.db.backends.sqlite3':
    # A file (not :memory:) so threads in transactional tests share one
    # database; IMMEDIATE makes concurrent writers wait on the lock
    DATABASES['default']['TEST'] = {'NAME': str(TEST_DB_DIR / 'test_devconnect.sqlite3')}
    DATABASES['default']['OPTIONS'] = {
        'transaction_mode': 'IMMEDIATE',
        'timeout': 20,
    }

# =============================================================================
# EXPORTS
# =============================================================================

# Use a temporary directory for JSON exports during tests
EXPORT_ROOT = Path(tempfile.mkdtemp())

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

# Minimal logging during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
    'loggers': {
        'django': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
        'django.request': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
        'django.db.backends': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
    },
}
