"""
Completions Module

One completion record per (student, module) with the final score.
"""

from .router import router

__all__ = ["router"]
