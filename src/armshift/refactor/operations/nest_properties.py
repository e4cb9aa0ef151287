from armshift.refactor.transforms import (
    DEFAULT_POLICY,
    NestingPolicy,
    PropertyNestingTransformer,
)
from .base import AbstractOperation


class NestPropertiesOperation(AbstractOperation):
    name = PropertyNestingTransformer.name

    def __init__(self, policy: NestingPolicy = DEFAULT_POLICY):
        self.policy = policy

    def build_transformer(self) -> PropertyNestingTransformer:
        return PropertyNestingTransformer(self.policy)
