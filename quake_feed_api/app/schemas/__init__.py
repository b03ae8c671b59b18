"""
Pydantic schema definitions.

Upstream wire shapes and API payloads are defined here, separate from
the service logic that produces them.
"""
