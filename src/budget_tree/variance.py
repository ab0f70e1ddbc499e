"""Percentage change of node values against the original snapshot."""

from decimal import ROUND_DOWN, Decimal

import networkx as nx

from budget_tree.tree import find_node, node_value

__all__ = [
    "format_variance",
    "node_variance",
    "original_value",
    "variance",
]


def variance(
    *,
    current_value: Decimal,
    original_value: Decimal,
    places: int = 2,
) -> Decimal:
    """Return the percentage change from `original_value` to `current_value`.

    The result is truncated toward zero, not rounded: `12.3467` becomes
    `12.34` and `-12.3467` becomes `-12.34`.

    Args:
        current_value: The node's value now.
        original_value: The node's value in the original snapshot.
        places: Decimal places to keep.

    Returns:
        The truncated percentage, or zero when `original_value` is zero.
    """
    if original_value == 0:
        return Decimal("0")
    raw = (current_value - original_value) / original_value * 100
    # shift, drop the fraction, shift back; quantize would trap past 28 digits
    return raw.scaleb(places).to_integral_value(rounding=ROUND_DOWN).scaleb(-places)


def original_value(*, original: nx.DiGraph, node_id: str) -> Decimal | None:
    """Look `node_id` up in the original snapshot.

    Returns:
        The node's original value, or `None` if the snapshot has no such
        node.
    """
    node = find_node(tree=original, node_id=node_id)
    if node is None:
        return None
    return node_value(tree=original, node=node)


def node_variance(
    *,
    tree: nx.DiGraph,
    original: nx.DiGraph,
    node_id: str,
    places: int = 2,
) -> Decimal | None:
    """Compute the variance of one node of `tree` against `original`.

    Returns:
        The truncated percentage change, or `None` when the node is missing
        from either tree and no variance should be shown.
    """
    baseline = original_value(original=original, node_id=node_id)
    node = find_node(tree=tree, node_id=node_id)
    if baseline is None or node is None:
        return None
    return variance(
        current_value=node_value(tree=tree, node=node),
        original_value=baseline,
        places=places,
    )


def format_variance(value: Decimal) -> str:
    """Render a variance as signed text, e.g. `"+12.5 %"` or `"-3 %"`."""
    text = format(value.normalize(), "f") if value else "0"
    sign = "+" if value > 0 else ""
    return f"{sign}{text} %"
