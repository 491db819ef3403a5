"""Domain layer — immutable date/time values, zones, and text patterns.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, or config.
"""
