"""
Submissions Module

Per-section answers students submit inside a module, and their grading.
"""

from .router import router

__all__ = ["router"]
