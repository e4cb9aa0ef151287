from armshift.errors import MigrationError, UnknownPassError
from .spec import PASS_ORDER, LroCalls, MigrationSpec, Nest, build_spec

__all__ = [
    "MigrationError",
    "UnknownPassError",
    "PASS_ORDER",
    "LroCalls",
    "MigrationSpec",
    "Nest",
    "build_spec",
]
