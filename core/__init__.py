"""
Core - Shared building blocks for DevConnect apps

This package provides:
- Base models with timestamps
- Database exceptions raised by guarded (compare-and-swap) updates
"""
