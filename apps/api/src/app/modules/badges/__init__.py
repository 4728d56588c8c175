"""
Badges Module

Achievement badges awarded to students.
"""

from .router import router

__all__ = ["router"]
