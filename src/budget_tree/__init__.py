"""Hierarchical budget allocation with proportional redistribution."""

from budget_tree.aggregation import aggregate, is_consistent
from budget_tree.allocation import (
    AllocationMode,
    allocate,
    redistribute,
    scaled_value,
)
from budget_tree.config import EngineConfig, reset_runtime_config, runtime_config
from budget_tree.engine import AllocationEngine, EngineState, TreeRow, initialize
from budget_tree.tree import (
    TreeNode,
    as_decimal,
    child_nodes,
    create_tree,
    find_node,
    freeze_tree,
    is_leaf,
    node_label,
    node_value,
    root_nodes,
    to_nodes,
    to_rows,
    walk,
)
from budget_tree.variance import (
    format_variance,
    node_variance,
    original_value,
    variance,
)

__all__ = [
    "AllocationEngine",
    "AllocationMode",
    "EngineConfig",
    "EngineState",
    "TreeNode",
    "TreeRow",
    "aggregate",
    "allocate",
    "as_decimal",
    "child_nodes",
    "create_tree",
    "find_node",
    "format_variance",
    "freeze_tree",
    "initialize",
    "is_consistent",
    "is_leaf",
    "node_label",
    "node_value",
    "node_variance",
    "original_value",
    "redistribute",
    "reset_runtime_config",
    "root_nodes",
    "runtime_config",
    "scaled_value",
    "to_nodes",
    "to_rows",
    "variance",
    "walk",
]
