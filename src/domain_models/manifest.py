import copy
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from domain_models.constants import DEFAULT_CHILDREN_FIELD
from domain_models.types import ConstructionErrorKind, NodeID

# Configure logger
logger = logging.getLogger(__name__)


class TreeNode(BaseModel):
    """Represents one record placed in the tree arena."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_id: NodeID = Field(..., description="Key of the record in the flat store.")
    attributes: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Read-only view of the record's attributes, parent reference included.",
    )
    parent_index: int | None = Field(
        default=None, ge=0, description="Arena index of the parent node (None for the root)."
    )
    depth: int = Field(default=0, ge=0, description="Number of hops from the root.")
    children_indices: tuple[int, ...] = Field(
        default=(), description="Arena indices of the children, in flat store order."
    )

    @field_validator("attributes", mode="after")
    @classmethod
    def freeze_attributes(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        """Expose the attributes through a read-only view."""
        return MappingProxyType(dict(v))

    @property
    def is_leaf(self) -> bool:
        return not self.children_indices


class Tree(BaseModel):
    """
    Represents a rooted tree materialized from a flat store.

    Nodes live in a flat arena ordered depth-first (pre-order) with the root
    at index 0. Children are referenced by arena index, never by object, so
    the structure has no back-pointer cycles and can be walked without
    recursion.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    root_id: NodeID = Field(..., description="Key of the root record.")
    nodes: tuple[TreeNode, ...] = Field(..., min_length=1, description="The node arena.")

    _positions: dict[NodeID, int] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_arena(self) -> "Tree":
        """Validate that the arena is rooted at index 0 and its links stay in range."""
        root = self.nodes[0]
        if root.node_id != self.root_id or root.parent_index is not None:
            msg = f"Arena must start with the root node {self.root_id!r}."
            logger.error(msg)
            raise ValueError(msg)

        size = len(self.nodes)
        for node in self.nodes:
            if any(not 0 < index < size for index in node.children_indices):
                msg = f"Node {node.node_id!r} references a child outside the arena."
                logger.error(msg)
                raise ValueError(msg)
        return self

    def model_post_init(self, __context: Any) -> None:
        self._positions = {node.node_id: index for index, node in enumerate(self.nodes)}

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._positions

    @property
    def root(self) -> TreeNode:
        return self.nodes[0]

    def index_of(self, node_id: NodeID) -> int | None:
        """Arena index of a node, or None if it is not part of the tree."""
        return self._positions.get(node_id)

    def node(self, node_id: NodeID) -> TreeNode | None:
        index = self._positions.get(node_id)
        return None if index is None else self.nodes[index]

    def children_of(self, index: int) -> list[TreeNode]:
        return [self.nodes[child] for child in self.nodes[index].children_indices]

    def node_ids(self) -> list[NodeID]:
        return [node.node_id for node in self.nodes]

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Yield nodes depth-first, parents before their children."""
        yield from self.nodes

    def as_nested_dict(
        self, children_field: str = DEFAULT_CHILDREN_FIELD
    ) -> dict[NodeID, dict[str, Any]]:
        """
        Export the tree as nested mappings: {root_id: {**attributes, children_field: {...}}}.

        This is the shape consumed by listing and markup renderers. Leaves carry
        an empty children mapping. Attributes are deep-copied, so the export can
        be edited freely without touching the tree.
        """
        entries: list[dict[str, Any]] = [
            {**copy.deepcopy(dict(node.attributes)), children_field: {}}
            for node in self.nodes
        ]
        for node, entry in zip(self.nodes, entries, strict=True):
            children = entry[children_field]
            for child_index in node.children_indices:
                children[self.nodes[child_index].node_id] = entries[child_index]
        return {self.root_id: entries[0]}


class ConstructionFailure(BaseModel):
    """Describes why a flat store could not be turned into a hierarchy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ConstructionErrorKind = Field(..., description="Machine-readable failure reason.")
    message: str = Field(..., description="Human-readable description.")
    node_id: NodeID | None = Field(
        default=None, description="The offending record, when one can be named."
    )
