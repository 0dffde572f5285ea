"""
Lessons router package.

Exports the router for lesson authoring and progression endpoints.
"""

from .lessons_router import router

__all__ = ["router"]
