"""Edits that set or scale one node's value in an allocation tree."""

from copy import deepcopy
from decimal import Decimal
from enum import StrEnum

import networkx as nx

from budget_tree.aggregation import aggregate
from budget_tree.tree import VALUE, as_decimal, find_node

__all__ = [
    "AllocationMode",
    "allocate",
    "redistribute",
    "scaled_value",
]


class AllocationMode(StrEnum):
    """How an edit amount is applied to the target node."""

    ABSOLUTE = "absolute"
    PERCENT_DELTA = "percent"


def scaled_value(*, current: Decimal, amount: Decimal, mode: AllocationMode) -> Decimal:
    """Compute a node's new value from its current value and an edit amount.

    Args:
        current: The node's value before the edit.
        amount: An absolute value, or a percentage change such as
            `Decimal("10")` for +10 %.
        mode: How to interpret `amount`.

    Returns:
        `amount` in absolute mode, `current * (1 + amount / 100)` in
        percent mode.
    """
    if mode is AllocationMode.PERCENT_DELTA:
        return current * (1 + amount / 100)
    return amount


def redistribute(*, tree: nx.DiGraph, node: str, new_value: Decimal) -> None:
    """Rescale the direct children of `node` to share `new_value`.

    Each child keeps its prior proportion of the children's total. Only
    direct children are rescaled; grandchildren keep their values and are
    re-summed by the next aggregation. Children whose total is not
    positive are left alone. Mutates `tree` in place, so callers pass a
    copy.
    """
    children = list(tree.predecessors(node))
    prior_total = sum(
        (tree.nodes[child][VALUE] for child in children), start=Decimal("0")
    )
    if prior_total <= 0:
        return
    for child in children:
        tree.nodes[child][VALUE] = tree.nodes[child][VALUE] / prior_total * new_value


def allocate(
    *,
    tree: nx.DiGraph,
    target: str,
    amount: Decimal | int | float | str,
    mode: AllocationMode | str,
) -> nx.DiGraph:
    """Apply one edit to a copy of the tree and re-aggregate it.

    In absolute mode the target's direct children are rescaled to the new
    value by `redistribute`. In percent mode only the target's own value
    changes, so on an interior node the edit is undone by aggregation.

    Args:
        tree: A tree built by `create_tree`.
        target: Id of the node to edit.
        amount: Absolute value or percentage change.
        mode: An `AllocationMode` or its string value.

    Returns:
        A new, fully aggregated tree. When `target` is not in the tree the
        input tree is returned as is.

    Raises:
        ValueError: If `mode` is not a known mode or `amount` is not a
            number.
    """
    mode = AllocationMode(mode)
    amount = as_decimal(amount)
    node = find_node(tree=tree, node_id=target)
    if node is None:
        return tree

    _tree = deepcopy(tree)
    new_value = scaled_value(current=_tree.nodes[node][VALUE], amount=amount, mode=mode)
    if mode is AllocationMode.ABSOLUTE and _tree.in_degree(node) > 0:
        redistribute(tree=_tree, node=node, new_value=new_value)
    _tree.nodes[node][VALUE] = new_value

    return aggregate(tree=_tree)
