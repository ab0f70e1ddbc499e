"""Engine object that owns the live tree and its original snapshot."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import networkx as nx

from budget_tree.aggregation import aggregate
from budget_tree.allocation import AllocationMode, allocate
from budget_tree.config import EngineConfig, runtime_config
from budget_tree.logging import get_logger
from budget_tree.tree import (
    TreeNode,
    create_tree,
    find_node,
    freeze_tree,
    node_label,
    node_value,
    to_nodes,
    to_rows,
    walk,
)
from budget_tree.variance import node_variance

__all__ = [
    "AllocationEngine",
    "EngineState",
    "TreeRow",
    "initialize",
]


@dataclass(frozen=True, slots=True)
class TreeRow:
    """One display row: a node, its indent level and its variance.

    Attributes:
        id: Node identifier.
        label: Display text.
        value: Current value.
        depth: Distance from the root, 0 for roots.
        variance: Truncated percentage change against the original
            snapshot, or `None` when the node has no original value.
    """

    id: str
    label: str
    value: Decimal
    depth: int
    variance: Decimal | None


@dataclass(frozen=True, slots=True)
class EngineState:
    """Immutable view of the engine after an edit.

    Attributes:
        tree: Frozen, fully aggregated live tree.
        original: Frozen snapshot taken when the engine was initialized.
        variance_places: Decimal places kept for variances.
    """

    tree: nx.DiGraph
    original: nx.DiGraph
    variance_places: int = 2

    def value(self, node_id: str) -> Decimal | None:
        """Return the current value of `node_id`, or `None` if it is unknown."""
        node = find_node(tree=self.tree, node_id=node_id)
        return None if node is None else node_value(tree=self.tree, node=node)

    def label(self, node_id: str) -> str | None:
        """Return the display label of `node_id`, or `None` if it is unknown."""
        node = find_node(tree=self.tree, node_id=node_id)
        return None if node is None else node_label(tree=self.tree, node=node)

    def variance(self, node_id: str) -> Decimal | None:
        """Return the truncated variance of `node_id` against the snapshot."""
        return node_variance(
            tree=self.tree,
            original=self.original,
            node_id=node_id,
            places=self.variance_places,
        )

    def rows(self) -> list[TreeRow]:
        """Return every node in display order with its depth and variance."""
        return [
            TreeRow(
                id=node,
                label=node_label(tree=self.tree, node=node),
                value=node_value(tree=self.tree, node=node),
                depth=depth,
                variance=self.variance(node),
            )
            for node, depth in walk(tree=self.tree)
        ]

    def to_rows(self) -> list[dict[str, Any]]:
        """Export the live tree as nested rows."""
        return to_rows(tree=self.tree)

    def to_nodes(self) -> tuple[TreeNode, ...]:
        """Export the live tree as nested `TreeNode` views."""
        return to_nodes(tree=self.tree)


class AllocationEngine:
    """Apply value and percentage edits to a budget tree.

    The engine holds the current `EngineState`. Every edit builds a new
    aggregated tree and swaps it in with a single assignment, so states
    handed out earlier are never modified.
    """

    def __init__(self, state: EngineState, *, config: EngineConfig | None = None) -> None:
        self.config = runtime_config() if config is None else config
        self._state = state
        self._logger = get_logger("engine", config=self.config)

    @classmethod
    def initialize(
        cls,
        rows: Sequence[Mapping[str, Any]],
        *,
        config: EngineConfig | None = None,
    ) -> "AllocationEngine":
        """Build an engine from a nested row description.

        The original snapshot is a frozen copy of the rows exactly as
        given. The live tree is aggregated once so interior values start
        consistent with their children.

        Args:
            rows: Root rows as accepted by `create_tree`.
            config: Engine settings; defaults to the runtime configuration.

        Raises:
            ValueError: If the rows are malformed (see `create_tree`).
        """
        config = runtime_config() if config is None else config
        original = create_tree(rows=rows)
        tree = aggregate(tree=original)
        state = EngineState(
            tree=freeze_tree(tree=tree),
            original=freeze_tree(tree=original),
            variance_places=config.variance_places,
        )
        engine = cls(state, config=config)
        engine._logger.debug("initialized allocation tree with %d nodes", len(tree))
        return engine

    @property
    def state(self) -> EngineState:
        """The state produced by the most recent edit."""
        return self._state

    def apply(
        self,
        node_id: str,
        amount: Decimal | int | float | str,
        mode: AllocationMode | str,
    ) -> EngineState:
        """Apply one edit and return the new state.

        Unknown ids leave the state untouched.
        """
        current = self._state
        tree = allocate(tree=current.tree, target=node_id, amount=amount, mode=mode)
        if tree is current.tree:
            return current

        self._state = EngineState(
            tree=nx.freeze(tree),
            original=current.original,
            variance_places=current.variance_places,
        )
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "applied %s edit of %s to %s: %s -> %s",
                AllocationMode(mode).value,
                amount,
                node_id,
                current.value(node_id),
                self._state.value(node_id),
            )
        return self._state

    def apply_percent(
        self, node_id: str, percent_amount: Decimal | int | float | str
    ) -> EngineState:
        """Scale `node_id` by `percent_amount` percent."""
        return self.apply(node_id, percent_amount, AllocationMode.PERCENT_DELTA)

    def apply_value(
        self, node_id: str, absolute_amount: Decimal | int | float | str
    ) -> EngineState:
        """Set `node_id` to `absolute_amount`, rescaling its direct children."""
        return self.apply(node_id, absolute_amount, AllocationMode.ABSOLUTE)

    def get_variance(self, node_id: str) -> Decimal | None:
        """Return the variance of `node_id`, or `None` if it has no original value."""
        return self._state.variance(node_id)


def initialize(
    rows: Sequence[Mapping[str, Any]],
    *,
    config: EngineConfig | None = None,
) -> AllocationEngine:
    """Shortcut for `AllocationEngine.initialize`."""
    return AllocationEngine.initialize(rows, config=config)
