"""
Utilities package - Common utilities for the Simon game system
"""

from .deadline_timer import DeadlineTimer

__all__ = [
    'DeadlineTimer'
]
