"""Bottom-up roll-up of child values into their parents."""

from copy import deepcopy
from decimal import Decimal

import networkx as nx

from budget_tree.tree import VALUE

__all__ = [
    "aggregate",
    "is_consistent",
]


def _children_total(tree: nx.DiGraph, node: str) -> Decimal:
    return sum(
        (tree.nodes[child][VALUE] for child in tree.predecessors(node)),
        start=Decimal("0"),
    )


def aggregate(*, tree: nx.DiGraph) -> nx.DiGraph:
    """Re-derive every interior value as the sum of its children.

    Creates a deep copy of the tree and walks it in topological order.
    Because edges point from child to parent, every child is settled
    before its parent is summed, so ancestors several levels above a
    changed leaf are brought up to date in a single pass. Leaf values are
    left untouched.

    Args:
        tree: A tree built by `create_tree`.

    Returns:
        A copy of the tree in which every interior node equals the sum of
        its children. Aggregating a consistent tree changes no values.
    """
    _tree = deepcopy(tree)
    for node in nx.topological_sort(_tree):
        if _tree.in_degree(node) > 0:  # interior node
            _tree.nodes[node][VALUE] = _children_total(_tree, node)

    return _tree


def is_consistent(*, tree: nx.DiGraph) -> bool:
    """Return whether every interior node already equals its children's sum."""
    return all(
        tree.nodes[node][VALUE] == _children_total(tree, node)
        for node in tree.nodes
        if tree.in_degree(node) > 0
    )
