"""
Hierarchy: builds a rooted tree from flat parent-referencing records.
This is the root package containing engines, exceptions and utilities.
"""

from domain_models.config import HierarchyConfig
from domain_models.manifest import Tree, TreeNode
from hierarchy.engines.hierarchy import (
    BuildResult,
    Hierarchy,
    build_hierarchy,
    try_build_hierarchy,
)

__all__ = [
    "BuildResult",
    "Hierarchy",
    "HierarchyConfig",
    "Tree",
    "TreeNode",
    "build_hierarchy",
    "try_build_hierarchy",
]
