"""Domain layer — validation results and errors.

This layer depends only on stdlib and pydantic.
It must never import from schema, services, commands, or config.
"""
