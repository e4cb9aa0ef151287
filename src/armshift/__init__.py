"""
armshift: rewrites Azure ARM SDK call sites and resource literals from the
v6 conventions to the v7 conventions.
"""

from .refactor.transforms import transform_call_patterns, transform_object_literals

__version__ = "0.1.0"

__all__ = ["transform_call_patterns", "transform_object_literals", "__version__"]
