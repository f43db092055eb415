import logging

from domain_models.manifest import Tree, TreeNode
from domain_models.types import FlatStore, NodeID
from hierarchy.engines.children_index import ChildrenIndex
from hierarchy.exceptions import CyclicAncestryError

logger = logging.getLogger(__name__)


def build_tree(store: FlatStore, children_index: ChildrenIndex, root_id: NodeID) -> Tree:
    """
    Materialize the tree rooted at root_id.

    Iterative pre-order descent over the children index; each record is
    visited once, so the cost is linear in the number of reachable records.
    Records whose chains never reach root_id are simply not visited.

    Args:
        store: A validated flat store.
        children_index: Parent -> children mapping built from the same store.
        root_id: The resolved root key.

    Returns:
        The Tree arena, root at index 0.

    Raises:
        CyclicAncestryError: If a node is reached twice (a forced root on a parent cycle).
    """
    # Stack elements: (node_id, parent_index, depth)
    stack: list[tuple[NodeID, int | None, int]] = [(root_id, None, 0)]
    visited: set[NodeID] = set()
    placed: list[tuple[NodeID, int | None, int]] = []
    children_of: list[list[int]] = []

    while stack:
        node_id, parent_index, depth = stack.pop()
        if node_id in visited:
            raise CyclicAncestryError(node_id)
        visited.add(node_id)

        index = len(placed)
        placed.append((node_id, parent_index, depth))
        children_of.append([])
        if parent_index is not None:
            children_of[parent_index].append(index)

        # Reverse push so the first child is popped, and placed, first
        for child_id in reversed(children_index.get(node_id, ())):
            stack.append((child_id, index, depth + 1))

    nodes = tuple(
        TreeNode(
            node_id=node_id,
            attributes=store[node_id],
            parent_index=parent_index,
            depth=depth,
            children_indices=tuple(children_of[index]),
        )
        for index, (node_id, parent_index, depth) in enumerate(placed)
    )

    skipped = len(store) - len(nodes)
    if skipped:
        logger.debug(f"{skipped} records are unreachable from root {root_id!r}.")

    return Tree(root_id=root_id, nodes=nodes)
