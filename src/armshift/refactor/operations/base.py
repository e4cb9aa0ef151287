from abc import ABC, abstractmethod
from typing import List

from armshift.lang.typescript import SourceTree
from armshift.refactor.transforms import RewriteRecord, Transformer


class AbstractOperation(ABC):
    """A single pass over a parsed file."""

    name: str = "operation"

    @abstractmethod
    def build_transformer(self) -> Transformer:
        pass

    def apply(self, tree: SourceTree) -> List[RewriteRecord]:
        transformer = self.build_transformer()
        transformer.transform(tree)
        return transformer.records
