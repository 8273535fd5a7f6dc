"""
API endpoints module
"""

from . import health, waitings

__all__ = [
    "health",
    "waitings"
]
