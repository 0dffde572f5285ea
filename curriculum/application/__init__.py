"""
Application layer.

Use-case orchestration over the core rules and the persistence boundary.
"""
