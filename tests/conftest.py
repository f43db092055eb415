from collections.abc import Mapping
from typing import Any

import pytest

from domain_models.types import NodeID

# Shared Test Utility for Flat Store Generation
# Keeps record layout consistent across unit and integration tests.


def make_store(parents: Mapping[NodeID, NodeID], **extra: Any) -> dict[NodeID, dict[str, Any]]:
    """
    Factory for flat stores: {id: parent_id} -> {id: {"parentId": parent_id, "name": ...}}.
    Extra keyword arguments are copied into every record.
    """
    return {
        node_id: {"parentId": parent_id, "name": f"Node {node_id}", **extra}
        for node_id, parent_id in parents.items()
    }


def make_chain(length: int) -> dict[NodeID, dict[str, Any]]:
    """Factory for a single path 0 <- 1 <- 2 ... with 0 as the root."""
    return make_store({i: max(i - 1, 0) for i in range(length)})


@pytest.fixture
def simple_store() -> dict[NodeID, dict[str, Any]]:
    """A is the root, B its child, C and D children of B."""
    return make_store({"A": "A", "B": "A", "C": "B", "D": "B"})


@pytest.fixture
def book_store() -> dict[NodeID, dict[str, Any]]:
    """
    A small handbook outline.

    book
    ├── part1 (section)
    │   ├── ch1
    │   │   └── ch1-1
    │   └── ch2
    └── part2 (section)
        └── ch3
    """
    return {
        "book": {"parentId": "book", "name": "Handbook", "type": "book"},
        "part1": {"parentId": "book", "name": "Part One", "type": "section"},
        "ch1": {"parentId": "part1", "name": "Chapter 1", "type": "chapter", "_hasEntry": True},
        "part2": {"parentId": "book", "name": "Part Two", "type": "section"},
        "ch2": {"parentId": "part1", "name": "Chapter 2", "type": "chapter"},
        "ch1-1": {"parentId": "ch1", "name": "Chapter 1.1", "type": "chapter"},
        "ch3": {"parentId": "part2", "name": "Chapter 3", "type": "chapter"},
    }
