from domain_models.types import FlatStore, NodeID, Record
from hierarchy.engines.children_index import ChildrenIndex


def collect_descendants(
    store: FlatStore, children_index: ChildrenIndex, node_id: NodeID
) -> dict[NodeID, Record]:
    """
    Collect children, grandchildren, etc. of a node.

    A node's whole child list is emitted before any grandchild, then each
    child's own descendants follow in child order. Iterative to avoid
    stack overflow on deep hierarchies; IDs already collected are not
    expanded again.

    Returns:
        Ordered mapping of descendant ID -> record. Empty for leaves and unknown nodes.
    """
    descendants: dict[NodeID, Record] = {}
    stack: list[NodeID] = [node_id]

    while stack:
        current = stack.pop()
        children = [
            child
            for child in children_index.get(current, ())
            if child != node_id and child not in descendants
        ]
        for child in children:
            descendants[child] = store[child]
        stack.extend(reversed(children))

    return descendants
