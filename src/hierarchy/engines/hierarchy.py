import copy
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Self, cast

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain_models.config import HierarchyConfig
from domain_models.constants import LOG_MSG_BUILDING, LOG_MSG_BUILT, LOG_MSG_UNREACHABLE
from domain_models.manifest import ConstructionFailure, Tree
from domain_models.types import FlatStore, NodeID, Record
from hierarchy.engines.ancestors import walk_ancestors
from hierarchy.engines.children_index import ChildrenIndex, build_children_index
from hierarchy.engines.descendants import collect_descendants
from hierarchy.engines.root_resolver import resolve_root
from hierarchy.engines.tree_builder import build_tree
from hierarchy.engines.validator import check_flat_store
from hierarchy.exceptions import ConstructionError, HierarchyError

logger = logging.getLogger(__name__)


class Hierarchy:
    """
    A tree built from a flat store, together with the indices used to query it.

    Instances are snapshots: the records, the children index and the tree are
    fixed at construction and never written afterwards, so any number of
    threads may query the same instance. Use build_hierarchy() to create one.
    """

    def __init__(
        self,
        records: Mapping[NodeID, Record],
        root_id: NodeID,
        children_index: ChildrenIndex,
        tree: Tree,
        config: HierarchyConfig,
    ) -> None:
        self._records = records
        self._root_id = root_id
        self._children_index = children_index
        self._tree = tree
        self._config = config

    def __repr__(self) -> str:
        return (
            f"Hierarchy(root_id={self._root_id!r}, records={len(self._records)}, "
            f"tree_size={len(self._tree)})"
        )

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._records

    @property
    def root_id(self) -> NodeID:
        return self._root_id

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def records(self) -> Mapping[NodeID, Record]:
        """Read-only view of the flat store snapshot."""
        return self._records

    @property
    def children_index(self) -> ChildrenIndex:
        return self._children_index

    @property
    def config(self) -> HierarchyConfig:
        return self._config

    @property
    def unreachable_ids(self) -> list[NodeID]:
        """Keys present in the store but not reachable from the root."""
        return [key for key in self._records if key not in self._tree]

    def node_exists(self, node_id: NodeID) -> Record | None:
        """Return the record of a node, or None if there is no such node."""
        return self._records.get(node_id)

    def children_of(
        self, node_id: NodeID | None = None, name_only: bool = True
    ) -> dict[NodeID, Any] | None:
        """
        Get the immediate children of a node.

        Args:
            node_id: The parent node; defaults to the root.
            name_only: Map each child to its display name instead of its full record.

        Returns:
            Ordered mapping of child ID -> name (or record). Empty if the node
            has no children; None if no node in the hierarchy has children.
        """
        if not self._children_index:
            return None

        if node_id is None:
            node_id = self._root_id

        children: dict[NodeID, Any] = {}
        for child_id in self._children_index.get(node_id, ()):
            record = self._records[child_id]
            children[child_id] = record.get(self._config.name_field) if name_only else record
        return children

    def get_descendants(self, node_id: NodeID) -> dict[NodeID, Record]:
        """Get children, grandchildren, etc. of a node."""
        return collect_descendants(self._records, self._children_index, node_id)

    def get_ancestors(
        self, node_id: NodeID, include_current: bool = False
    ) -> dict[NodeID, Record]:
        """Get parent, grandparent, etc. of a node, nearest first."""
        return walk_ancestors(
            self._records,
            node_id,
            include_current=include_current,
            root_id=self._root_id,
            include_root=self._config.ancestors_include_root,
            parent_field=self._config.parent_field,
        )

    def get_family(
        self, node_id: NodeID, include_ancestors: bool = True
    ) -> dict[NodeID, Record]:
        """
        Get the node itself, its descendants and (unless disabled) its ancestors.

        Entries are merged first-write-wins, so the node's own entry cannot be
        replaced by a same-keyed ancestor or descendant.
        """
        record = self._records.get(node_id)
        if record is None:
            return {}

        family: dict[NodeID, Record] = {node_id: record}
        for key, value in self.get_descendants(node_id).items():
            family.setdefault(key, value)

        if include_ancestors:
            for key, value in self.get_ancestors(node_id).items():
                family.setdefault(key, value)

        return family

    def nearest_ancestor_having_attribute_value(
        self,
        node_id: NodeID,
        attribute: str,
        value: Any,
        return_root_if_none: bool = False,
        include_current: bool = False,
    ) -> NodeID | None:
        """
        Find the nearest ancestor whose attribute equals value.

        Args:
            node_id: The starting node.
            attribute: Attribute to compare; records without it never match.
            value: Value the attribute must equal.
            return_root_if_none: Fall back to the root ID when nothing matches.
            include_current: Consider the starting node itself first.

        Returns:
            The matching ancestor ID, the root ID as fallback, or None.
        """
        for ancestor_id, ancestor in self.get_ancestors(node_id, include_current).items():
            if attribute in ancestor and ancestor[attribute] == value:
                return ancestor_id

        if return_root_if_none:
            return self._root_id

        return None


class BuildResult(BaseModel):
    """Outcome of try_build_hierarchy: either a hierarchy or the reason it failed."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    hierarchy: Hierarchy | None = Field(default=None, description="The built hierarchy.")
    error: ConstructionFailure | None = Field(
        default=None, description="Why construction failed."
    )

    @model_validator(mode="after")
    def check_exclusive(self) -> Self:
        """Exactly one of hierarchy and error must be set."""
        if (self.hierarchy is None) == (self.error is None):
            msg = "BuildResult requires exactly one of 'hierarchy' or 'error'."
            raise ValueError(msg)
        return self

    @property
    def ok(self) -> bool:
        return self.hierarchy is not None

    def unwrap(self) -> Hierarchy:
        """
        Return the hierarchy.

        Raises:
            HierarchyError: If construction failed.
        """
        if self.hierarchy is None:
            msg = self.error.message if self.error else "No hierarchy was built."
            raise HierarchyError(msg)
        return self.hierarchy


def _snapshot(store: FlatStore) -> Mapping[NodeID, Record]:
    """Deep-copy the store behind read-only views so later caller edits cannot leak in."""
    return MappingProxyType(
        {key: MappingProxyType(copy.deepcopy(dict(record))) for key, record in store.items()}
    )


def build_hierarchy(
    flat_store: object,
    forced_root_id: NodeID | None = None,
    config: HierarchyConfig | None = None,
) -> Hierarchy:
    """
    Validate a flat store and build a hierarchy from it.

    Args:
        flat_store: Ordered mapping of node ID -> record.
        forced_root_id: Build from this node instead of the self-referencing root.
        config: Field naming and query behaviour.

    Returns:
        The built Hierarchy.

    Raises:
        ConstructionError: The first structural problem found in the input.
    """
    config = config or HierarchyConfig.default()

    check_flat_store(flat_store, forced_root_id, config)
    # check_flat_store rejects anything but a mapping
    store = cast(FlatStore, flat_store)
    logger.debug(LOG_MSG_BUILDING.format(len(store)))

    records = _snapshot(store)
    root_id = resolve_root(records, forced_root_id, config.parent_field)
    children_index = build_children_index(records, config.parent_field)
    tree = build_tree(records, children_index, root_id)

    hierarchy = Hierarchy(records, root_id, children_index, tree, config)
    logger.info(LOG_MSG_BUILT.format(len(tree), len(records), repr(root_id)))

    unreachable = len(records) - len(tree)
    if unreachable and config.report_unreachable:
        logger.warning(LOG_MSG_UNREACHABLE.format(unreachable, repr(root_id)))

    return hierarchy


def try_build_hierarchy(
    flat_store: object,
    forced_root_id: NodeID | None = None,
    config: HierarchyConfig | None = None,
) -> BuildResult:
    """Same as build_hierarchy but reports construction errors in the result."""
    try:
        return BuildResult(hierarchy=build_hierarchy(flat_store, forced_root_id, config))
    except ConstructionError as e:
        return BuildResult(error=e.to_failure())
