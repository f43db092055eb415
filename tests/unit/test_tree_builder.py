from typing import Any

import pytest

from hierarchy.engines.children_index import build_children_index
from hierarchy.engines.tree_builder import build_tree
from hierarchy.exceptions import CyclicAncestryError
from tests.conftest import make_chain, make_store


def _build(store: dict[Any, Any], root_id: Any) -> Any:
    return build_tree(store, build_children_index(store), root_id)


def test_build_simple_tree(simple_store: dict) -> None:
    tree = _build(simple_store, "A")

    assert tree.root_id == "A"
    assert tree.root.node_id == "A"
    assert tree.node_ids() == ["A", "B", "C", "D"]
    assert [child.node_id for child in tree.children_of(0)] == ["B"]
    b_index = tree.index_of("B")
    assert b_index is not None
    assert [child.node_id for child in tree.children_of(b_index)] == ["C", "D"]


def test_arena_is_preorder(book_store: dict) -> None:
    tree = _build(book_store, "book")

    assert tree.node_ids() == ["book", "part1", "ch1", "ch1-1", "ch2", "part2", "ch3"]


def test_depth_and_parent_links(book_store: dict) -> None:
    tree = _build(book_store, "book")

    deep = tree.node("ch1-1")
    assert deep is not None
    assert deep.depth == 3
    assert deep.parent_index is not None
    assert tree.nodes[deep.parent_index].node_id == "ch1"
    assert tree.root.parent_index is None
    assert tree.root.depth == 0


def test_leaves(simple_store: dict) -> None:
    tree = _build(simple_store, "A")

    leaf = tree.node("C")
    assert leaf is not None
    assert leaf.is_leaf
    assert leaf.children_indices == ()


def test_attributes_are_copied(simple_store: dict) -> None:
    tree = _build(simple_store, "A")
    simple_store["C"]["name"] = "changed"

    node = tree.node("C")
    assert node is not None
    assert node.attributes == {"parentId": "B", "name": "Node C"}


def test_unreachable_records_are_omitted() -> None:
    store = make_store({"A": "A", "B": "A", "X": "Y", "Y": "X", "Z": "X"})
    tree = _build(store, "A")

    assert tree.node_ids() == ["A", "B"]
    assert "X" not in tree
    assert tree.node("Z") is None


def test_forced_root_builds_subtree(book_store: dict) -> None:
    tree = _build(book_store, "part1")

    assert tree.node_ids() == ["part1", "ch1", "ch1-1", "ch2"]
    assert tree.root.parent_index is None


def test_forced_root_on_cycle_is_rejected() -> None:
    store = make_store({"A": "A", "X": "Y", "Y": "X"})

    with pytest.raises(CyclicAncestryError):
        _build(store, "X")


def test_single_node_tree() -> None:
    tree = _build(make_store({"only": "only"}), "only")

    assert len(tree) == 1
    assert tree.root.is_leaf


def test_deep_chain_does_not_recurse() -> None:
    length = 5_000
    tree = _build(make_chain(length), 0)

    assert len(tree) == length
    assert tree.nodes[-1].node_id == length - 1
    assert tree.nodes[-1].depth == length - 1
