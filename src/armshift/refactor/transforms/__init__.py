from .base import RewriteRecord, RewriteStatus, Transformer
from .lro import (
    CallPatternTransformer,
    is_begin_method,
    is_and_wait_method,
    lro_method_name,
    rewrite_method_name,
    transform_call_patterns,
)
from .nesting import (
    ARM_TOP_LEVEL_KEYS,
    DEFAULT_POLICY,
    LiteralProperty,
    LiteralRestructurer,
    NestingClassifier,
    NestingPolicy,
    ObjectLiteral,
    PropertyKind,
    PropertyNestingTransformer,
    read_object_literal,
    transform_object_literals,
)

__all__ = [
    "RewriteRecord",
    "RewriteStatus",
    "Transformer",
    "CallPatternTransformer",
    "is_begin_method",
    "is_and_wait_method",
    "lro_method_name",
    "rewrite_method_name",
    "transform_call_patterns",
    "ARM_TOP_LEVEL_KEYS",
    "DEFAULT_POLICY",
    "LiteralProperty",
    "LiteralRestructurer",
    "NestingClassifier",
    "NestingPolicy",
    "ObjectLiteral",
    "PropertyKind",
    "PropertyNestingTransformer",
    "read_object_literal",
    "transform_object_literals",
]
