from hierarchy.engines.ancestors import walk_ancestors
from hierarchy.engines.children_index import ChildrenIndex, build_children_index
from hierarchy.engines.descendants import collect_descendants
from hierarchy.engines.hierarchy import (
    BuildResult,
    Hierarchy,
    build_hierarchy,
    try_build_hierarchy,
)
from hierarchy.engines.root_resolver import find_root_candidates, resolve_root
from hierarchy.engines.tree_builder import build_tree
from hierarchy.engines.validator import check_flat_store, find_validation_error

__all__ = [
    "BuildResult",
    "ChildrenIndex",
    "Hierarchy",
    "build_children_index",
    "build_hierarchy",
    "build_tree",
    "check_flat_store",
    "collect_descendants",
    "find_root_candidates",
    "find_validation_error",
    "resolve_root",
    "try_build_hierarchy",
    "walk_ancestors",
]
