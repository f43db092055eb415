from collections.abc import Mapping
from enum import StrEnum
from typing import Any, TypeAlias

# NodeID identifies a record within a flat store.
# - int: numeric primary keys (e.g. database rows).
# - str: slugs, UUIDs or keys read from JSON.
NodeID: TypeAlias = int | str

# Record is the attribute bag of one node. It always carries the parent
# reference; everything else is opaque to the core.
# e.g., {"parentId": 1, "name": "Chapter 1", "moniker": "chapter-1"}
Record: TypeAlias = Mapping[str, Any]

# FlatStore is the ordered adjacency-list input: key -> record.
FlatStore: TypeAlias = Mapping[NodeID, Record]


class ConstructionErrorKind(StrEnum):
    """
    Reasons a flat store cannot be turned into a hierarchy.
    """

    EMPTY_INPUT = "empty_input"
    NOT_A_MAPPING = "not_a_mapping"
    MISSING_PARENT_FIELD = "missing_parent_field"
    DANGLING_PARENT_REFERENCE = "dangling_parent_reference"
    INVALID_ROOT_COUNT = "invalid_root_count"
    UNKNOWN_ROOT = "unknown_root"
    CYCLIC_ANCESTRY = "cyclic_ancestry"
