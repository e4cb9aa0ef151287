from typing import Dict, Iterable, List, Optional, Type, TypeAlias

from armshift.errors import UnknownPassError
from armshift.refactor.operations import (
    AbstractOperation,
    LroCallOperation,
    NestPropertiesOperation,
)
from armshift.refactor.transforms import DEFAULT_POLICY, NestingPolicy

# --- Aliases for better DX when building specs by hand ---
Nest: TypeAlias = NestPropertiesOperation
LroCalls: TypeAlias = LroCallOperation

# Literal restructuring runs before call rewriting: the call pass does not
# care about literal shapes, while literals may be embedded in call arguments.
PASS_ORDER: Dict[str, Type[AbstractOperation]] = {
    NestPropertiesOperation.name: NestPropertiesOperation,
    LroCallOperation.name: LroCallOperation,
}


class MigrationSpec:
    """
    An ordered set of passes to run over every file.
    """

    def __init__(self):
        self._operations: List[AbstractOperation] = []

    def add(self, operation: AbstractOperation) -> "MigrationSpec":
        """
        Register a single pass. Passes run in registration order.
        """
        self._operations.append(operation)
        return self

    @property
    def operations(self) -> List[AbstractOperation]:
        return self._operations


def build_spec(
    pass_names: Iterable[str], policy: Optional[NestingPolicy] = None
) -> MigrationSpec:
    """
    Builds a spec from pass names, in canonical order and without repeats.
    """
    requested = set()
    for name in pass_names:
        if name not in PASS_ORDER:
            known = ", ".join(PASS_ORDER)
            raise UnknownPassError(f"Unknown pass '{name}' (known passes: {known})")
        requested.add(name)

    spec = MigrationSpec()
    for name, operation_cls in PASS_ORDER.items():
        if name not in requested:
            continue
        if operation_cls is NestPropertiesOperation:
            spec.add(NestPropertiesOperation(policy or DEFAULT_POLICY))
        else:
            spec.add(operation_cls())
    return spec
