"""
API schemas.

Pydantic request/response contracts for courses, lessons, progress
and dashboard statistics.
"""
