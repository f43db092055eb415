import logging

from domain_models.constants import DEFAULT_PARENT_FIELD, LOG_MSG_ROOT_RESOLVED
from domain_models.types import FlatStore, NodeID
from hierarchy.exceptions import InvalidRootCountError

logger = logging.getLogger(__name__)


def find_root_candidates(
    store: FlatStore, parent_field: str = DEFAULT_PARENT_FIELD
) -> list[NodeID]:
    """Return every key whose record names itself as parent, in store order."""
    return [key for key, record in store.items() if record.get(parent_field) == key]


def resolve_root(
    store: FlatStore,
    forced_root_id: NodeID | None = None,
    parent_field: str = DEFAULT_PARENT_FIELD,
) -> NodeID:
    """
    Determine the root of the hierarchy.

    A forced root is returned as-is; existence is the validator's concern.
    Otherwise the store must contain exactly one self-referencing record.

    Raises:
        InvalidRootCountError: If zero or several records refer to themselves.
    """
    if forced_root_id is not None:
        logger.debug(LOG_MSG_ROOT_RESOLVED.format(f"{forced_root_id!r} (forced)"))
        return forced_root_id

    roots = find_root_candidates(store, parent_field)
    if len(roots) != 1:
        raise InvalidRootCountError(len(roots))

    logger.debug(LOG_MSG_ROOT_RESOLVED.format(repr(roots[0])))
    return roots[0]
