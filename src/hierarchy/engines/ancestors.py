import logging

from domain_models.constants import DEFAULT_PARENT_FIELD
from domain_models.types import FlatStore, NodeID, Record

logger = logging.getLogger(__name__)


def walk_ancestors(
    store: FlatStore,
    node_id: NodeID,
    include_current: bool = False,
    root_id: NodeID | None = None,
    include_root: bool = True,
    parent_field: str = DEFAULT_PARENT_FIELD,
) -> dict[NodeID, Record]:
    """
    Follow the parent chain of a node upward, nearest ancestor first.

    Before a candidate is emitted its own parent (the next candidate) is
    inspected, and the walk stops without emitting the candidate when the
    next candidate:

    1. is not in the store,
    2. has already been emitted in this walk (cycle guard),
    3. is the starting node (the chain came back around).

    On a well-formed chain the root is the last entry: its parent is itself,
    which it only becomes "already emitted" after being added. The root
    itself has no ancestors. Corrupted chains end after at most one pass
    over the distinct keys of the store.

    Args:
        store: The flat store to walk.
        node_id: The starting node.
        include_current: Emit the starting node first.
        root_id: The resolved root, only needed when include_root is False.
        include_root: When False, stop before emitting root_id.
        parent_field: Attribute holding the parent reference.

    Returns:
        Ordered mapping of ancestor ID -> record. Empty for an unknown node.
    """
    ancestors: dict[NodeID, Record] = {}

    record = store.get(node_id)
    if record is None:
        return ancestors

    if include_current:
        ancestors[node_id] = record

    candidate = record.get(parent_field)
    while candidate in store:
        if not include_root and candidate == root_id:
            break

        next_candidate = store[candidate].get(parent_field)
        if next_candidate not in store:
            break
        if next_candidate in ancestors:
            break
        if next_candidate == node_id:
            logger.debug(f"Ancestor chain of {node_id!r} loops back to itself.")
            break

        ancestors[candidate] = store[candidate]
        candidate = next_candidate

    return ancestors
