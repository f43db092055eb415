import logging
from collections.abc import Mapping
from types import MappingProxyType

from domain_models.constants import DEFAULT_PARENT_FIELD
from domain_models.types import FlatStore, NodeID

logger = logging.getLogger(__name__)

ChildrenIndex = Mapping[NodeID, tuple[NodeID, ...]]


def build_children_index(
    store: FlatStore, parent_field: str = DEFAULT_PARENT_FIELD
) -> ChildrenIndex:
    """
    Build a read-only parent_id -> (child_ids) mapping in a single pass.

    Children keep the order in which they appear in the store. Records that
    refer to themselves are nobody's child and are left out.

    Args:
        store: A validated flat store.
        parent_field: Attribute holding the parent reference.

    Returns:
        Read-only mapping from each parent ID to the tuple of its child IDs.
    """
    index: dict[NodeID, list[NodeID]] = {}

    for key, record in store.items():
        parent_id = record[parent_field]
        if parent_id == key:
            continue
        index.setdefault(parent_id, []).append(key)

    logger.debug(f"Children index covers {len(index)} parents.")
    return MappingProxyType({parent: tuple(children) for parent, children in index.items()})
