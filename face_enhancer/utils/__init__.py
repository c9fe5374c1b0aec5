"""
Utility modules package.
"""

from .timing import format_elapsed, StageTimer

__all__ = [
    'format_elapsed',
    'StageTimer',
]
