"""
Stats Module

Public platform statistics.
"""

from .router import router

__all__ = ["router"]
