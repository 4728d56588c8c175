"""
Progress Module

Per-student progress through VARK modules, section by section.
"""

from .router import router

__all__ = ["router"]
