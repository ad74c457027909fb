"""
Core Database Components

- exceptions: errors raised when a guarded update loses a race
"""

from core.db.exceptions import ConcurrentModificationError

__all__ = ['ConcurrentModificationError']
