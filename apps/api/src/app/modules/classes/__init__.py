"""
Classes Module

Teacher-owned classes and their student rosters.
"""

from .router import router

__all__ = ["router"]
