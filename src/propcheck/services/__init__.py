"""Service layer — schema caching, field-path validation, and data shaping.

Services may import from the domain layer.
They must never import from commands, output, or config.
"""
