"""
Domain layer for the storefront analytics backend.

This layer contains business entities, value objects, and domain logic
following Domain-Driven Design principles.
"""
