"""Domain layer — contracts, field types, errors, and the registry.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
