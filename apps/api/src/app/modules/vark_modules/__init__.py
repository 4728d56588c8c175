"""
VARK Modules

Learning modules with sections, assessments and target learning styles.
"""

from .router import router

__all__ = ["router"]
