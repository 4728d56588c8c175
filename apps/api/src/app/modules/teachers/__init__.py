"""
Teachers Module

Teacher dashboard statistics.
"""

from .router import router

__all__ = ["router"]
