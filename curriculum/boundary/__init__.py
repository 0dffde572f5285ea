"""
Boundary layer for external system integrations.

Handles all interactions with external systems. The relational store holding
courses, lessons, enrollments and completions lives under boundary.db.
"""
