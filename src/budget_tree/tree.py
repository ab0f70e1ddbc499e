"""Hierarchical allocation trees stored as child-to-parent graphs."""

from collections.abc import Iterator, Mapping, Sequence
from copy import deepcopy
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Final

import networkx as nx

__all__ = [
    "LABEL",
    "VALUE",
    "TreeNode",
    "as_decimal",
    "child_nodes",
    "create_tree",
    "find_node",
    "freeze_tree",
    "is_leaf",
    "node_label",
    "node_value",
    "root_nodes",
    "to_nodes",
    "to_rows",
    "walk",
]

VALUE: Final = "value"
LABEL: Final = "label"


@dataclass(frozen=True, slots=True)
class TreeNode:
    """Read-only view of one node and its subtree.

    Attributes:
        id: Unique node identifier.
        label: Display text, opaque to the engine.
        value: Current value of the node.
        children: Direct children in display order.
    """

    id: str
    label: str
    value: Decimal
    children: tuple["TreeNode", ...] = ()


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce a numeric input to `Decimal`.

    Floats go through `str` so that `0.1` becomes `Decimal("0.1")` rather
    than its binary expansion.

    Raises:
        ValueError: If `value` is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            msg = f"not a number: {value!r}"
            raise ValueError(msg) from exc
    if not result.is_finite():
        msg = f"not a finite number: {value!r}"
        raise ValueError(msg)
    return result


def _add_row(tree: nx.DiGraph, row: Mapping[str, Any], parent: str | None) -> None:
    node = row.get("id")
    if node is None or node == "":
        msg = f"row without an id: {dict(row)!r}"
        raise ValueError(msg)
    node = str(node)
    if node in tree:
        msg = f"duplicate node id: {node}"
        raise ValueError(msg)
    tree.add_node(
        node,
        label=str(row.get(LABEL, node)),
        value=as_decimal(row.get(VALUE, 0)),
    )
    if parent is not None:
        tree.add_edge(node, parent)
    for child in row.get("children") or ():
        _add_row(tree, child, node)


def create_tree(*, rows: Sequence[Mapping[str, Any]]) -> nx.DiGraph:
    """Build an allocation tree from a nested row description.

    Each row is a mapping with an `id`, an optional `label` (defaults to
    the id), a `value` and optional `children` rows. Edges point from
    child to parent, so leaves have in-degree 0 and roots out-degree 0.
    Nodes are inserted in depth-first order, which keeps roots and
    siblings in the order they were described.

    Args:
        rows: Root rows of the tree.

    Returns:
        A directed graph with `label` and `value` attributes on each node.

    Raises:
        ValueError: If a row has no id, an id is used twice, or a value is
            not a number.
    """
    tree = nx.DiGraph()
    for row in rows:
        _add_row(tree, row, None)

    return tree


def root_nodes(*, tree: nx.DiGraph) -> list[str]:
    """Return the roots of the tree in display order."""
    return [node for node in tree.nodes if tree.out_degree(node) == 0]


def child_nodes(*, tree: nx.DiGraph, node: str) -> list[str]:
    """Return the direct children of `node` in display order."""
    return list(tree.predecessors(node))


def is_leaf(*, tree: nx.DiGraph, node: str) -> bool:
    return tree.in_degree(node) == 0


def node_value(*, tree: nx.DiGraph, node: str) -> Decimal:
    return tree.nodes[node][VALUE]


def node_label(*, tree: nx.DiGraph, node: str) -> str:
    return tree.nodes[node][LABEL]


def _walk_from(tree: nx.DiGraph, node: str, depth: int) -> Iterator[tuple[str, int]]:
    yield node, depth
    for child in tree.predecessors(node):
        yield from _walk_from(tree, child, depth + 1)


def walk(*, tree: nx.DiGraph) -> Iterator[tuple[str, int]]:
    """Yield `(node, depth)` pairs in depth-first pre-order.

    Roots have depth 0. This is the order in which rows are displayed,
    each child directly below its parent.
    """
    for root in root_nodes(tree=tree):
        yield from _walk_from(tree, root, 0)


def find_node(*, tree: nx.DiGraph, node_id: str) -> str | None:
    """Search the tree depth-first for `node_id`.

    Returns:
        The matching node, or `None` when no node has that id.
    """
    return next((node for node, _ in walk(tree=tree) if node == node_id), None)


def freeze_tree(*, tree: nx.DiGraph) -> nx.DiGraph:
    """Return a deep copy of `tree` whose structure cannot be modified."""
    return nx.freeze(deepcopy(tree))


def _export_row(tree: nx.DiGraph, node: str) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": node,
        LABEL: node_label(tree=tree, node=node),
        VALUE: node_value(tree=tree, node=node),
    }
    children = [_export_row(tree, child) for child in tree.predecessors(node)]
    if children:
        row["children"] = children
    return row


def to_rows(*, tree: nx.DiGraph) -> list[dict[str, Any]]:
    """Export the tree in the nested row format accepted by `create_tree`."""
    return [_export_row(tree, root) for root in root_nodes(tree=tree)]


def _export_node(tree: nx.DiGraph, node: str) -> TreeNode:
    return TreeNode(
        id=node,
        label=node_label(tree=tree, node=node),
        value=node_value(tree=tree, node=node),
        children=tuple(_export_node(tree, child) for child in tree.predecessors(node)),
    )


def to_nodes(*, tree: nx.DiGraph) -> tuple[TreeNode, ...]:
    """Export the tree as nested immutable `TreeNode` views."""
    return tuple(_export_node(tree, root) for root in root_nodes(tree=tree))
