"""Helpers shared by the API routers."""

from .error_handling import handle_curriculum_errors

__all__ = ["handle_curriculum_errors"]
