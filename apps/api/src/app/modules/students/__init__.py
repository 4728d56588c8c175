"""
Students Module

Student account management and per-student dashboards.
"""

from .router import router

__all__ = ["router"]
