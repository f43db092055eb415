"""
Structural checks run over a flat store before a tree is built.

The checks are ordered and short-circuit on the first failure, so a caller
always learns about exactly one problem.
"""

import logging
from collections.abc import Mapping

from domain_models.config import HierarchyConfig
from domain_models.types import NodeID
from hierarchy.engines.root_resolver import find_root_candidates
from hierarchy.exceptions import (
    ConstructionError,
    DanglingParentReferenceError,
    EmptyInputError,
    InvalidRootCountError,
    MissingParentFieldError,
    NotAMappingError,
    UnknownRootError,
)

logger = logging.getLogger(__name__)


def check_flat_store(
    store: object,
    forced_root_id: NodeID | None = None,
    config: HierarchyConfig | None = None,
) -> None:
    """
    Validate that a flat store can be turned into a single rooted tree.

    Args:
        store: The candidate key -> record mapping.
        forced_root_id: Root chosen by the caller. When given, the
            self-reference count is not checked but the key must exist.
        config: Field naming; defaults to HierarchyConfig.default().

    Raises:
        EmptyInputError: If there are no records.
        NotAMappingError: If the input is not a mapping.
        MissingParentFieldError: If a record has no parent reference.
        DanglingParentReferenceError: If a parent reference names a missing key.
        InvalidRootCountError: If not exactly one record refers to itself.
        UnknownRootError: If the forced root is not a key of the store.
    """
    config = config or HierarchyConfig.default()
    parent_field = config.parent_field

    try:
        if not store:
            raise EmptyInputError
        if not isinstance(store, Mapping):
            raise NotAMappingError(type(store).__name__)

        for key, record in store.items():
            if not isinstance(record, Mapping) or record.get(parent_field) is None:
                raise MissingParentFieldError(key)

        for key, record in store.items():
            try:
                exists = record[parent_field] in store
            except TypeError:
                # Unhashable references, including tuples that hold a list
                exists = False
            if not exists:
                raise DanglingParentReferenceError(key)

        if forced_root_id is None:
            roots = find_root_candidates(store, parent_field)
            if len(roots) != 1:
                raise InvalidRootCountError(len(roots))
        elif forced_root_id not in store:
            raise UnknownRootError(forced_root_id)

    except ConstructionError as e:
        logger.warning(f"Flat store rejected: {e.message}")
        raise


def find_validation_error(
    store: object,
    forced_root_id: NodeID | None = None,
    config: HierarchyConfig | None = None,
) -> ConstructionError | None:
    """Same as check_flat_store but returns the error instead of raising it."""
    try:
        check_flat_store(store, forced_root_id, config)
    except ConstructionError as e:
        return e
    return None
