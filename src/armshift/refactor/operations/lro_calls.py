from armshift.refactor.transforms import CallPatternTransformer
from .base import AbstractOperation


class LroCallOperation(AbstractOperation):
    name = CallPatternTransformer.name

    def build_transformer(self) -> CallPatternTransformer:
        return CallPatternTransformer()
