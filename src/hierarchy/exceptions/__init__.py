"""
Custom exceptions for the hierarchy system.
"""

from domain_models.constants import (
    ERROR_MSG_CYCLIC_ANCESTRY,
    ERROR_MSG_DANGLING_PARENT,
    ERROR_MSG_EMPTY_INPUT,
    ERROR_MSG_INVALID_ROOT_COUNT,
    ERROR_MSG_MISSING_PARENT_FIELD,
    ERROR_MSG_NOT_A_MAPPING,
    ERROR_MSG_UNKNOWN_ROOT,
)
from domain_models.manifest import ConstructionFailure
from domain_models.types import ConstructionErrorKind, NodeID


class HierarchyError(Exception):
    """
    Base exception for the hierarchy system.
    All custom exceptions in the system should inherit from this.
    """


class ConstructionError(HierarchyError):
    """
    Raised when a flat store cannot be turned into a hierarchy.

    Construction is all-or-nothing, so exactly one of the subclasses below
    describes the first problem found.
    """

    kind: ConstructionErrorKind

    def __init__(self, message: str, node_id: NodeID | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.node_id = node_id

    def to_failure(self) -> ConstructionFailure:
        """Convert to the serializable failure model."""
        return ConstructionFailure(kind=self.kind, message=self.message, node_id=self.node_id)


class EmptyInputError(ConstructionError):
    """Raised when no records are supplied."""

    kind = ConstructionErrorKind.EMPTY_INPUT

    def __init__(self) -> None:
        super().__init__(ERROR_MSG_EMPTY_INPUT)


class NotAMappingError(ConstructionError):
    """Raised when the input is not a key -> record mapping."""

    kind = ConstructionErrorKind.NOT_A_MAPPING

    def __init__(self, type_name: str) -> None:
        super().__init__(ERROR_MSG_NOT_A_MAPPING.format(type_name))


class MissingParentFieldError(ConstructionError):
    """Raised when a record has no parent reference."""

    kind = ConstructionErrorKind.MISSING_PARENT_FIELD

    def __init__(self, node_id: NodeID) -> None:
        super().__init__(ERROR_MSG_MISSING_PARENT_FIELD.format(node_id), node_id)


class DanglingParentReferenceError(ConstructionError):
    """Raised when a parent reference points to a key that does not exist."""

    kind = ConstructionErrorKind.DANGLING_PARENT_REFERENCE

    def __init__(self, node_id: NodeID) -> None:
        super().__init__(ERROR_MSG_DANGLING_PARENT.format(node_id), node_id)


class InvalidRootCountError(ConstructionError):
    """Raised when zero or several records refer to themselves and no root is forced."""

    kind = ConstructionErrorKind.INVALID_ROOT_COUNT

    def __init__(self, count: int) -> None:
        super().__init__(ERROR_MSG_INVALID_ROOT_COUNT.format(count))
        self.count = count


class UnknownRootError(ConstructionError):
    """Raised when a forced root is not a key of the input."""

    kind = ConstructionErrorKind.UNKNOWN_ROOT

    def __init__(self, node_id: NodeID) -> None:
        super().__init__(ERROR_MSG_UNKNOWN_ROOT.format(node_id), node_id)


class CyclicAncestryError(ConstructionError):
    """
    Raised when the tree below the root revisits a node.

    Only reachable when a forced root sits on a parent cycle; with a single
    self-referencing root every chain below it terminates.
    """

    kind = ConstructionErrorKind.CYCLIC_ANCESTRY

    def __init__(self, node_id: NodeID) -> None:
        super().__init__(ERROR_MSG_CYCLIC_ANCESTRY.format(node_id), node_id)
