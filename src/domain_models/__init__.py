"""
Core domain models and configuration schemas for the hierarchy project.
This package contains Pydantic definitions used throughout the system.
"""

from .config import HierarchyConfig
from .manifest import ConstructionFailure, Tree, TreeNode

__all__ = ["ConstructionFailure", "HierarchyConfig", "Tree", "TreeNode"]
