"""Tests for budget_tree.variance module."""

from decimal import Decimal

import networkx as nx
import pytest

from budget_tree.allocation import AllocationMode, allocate
from budget_tree.tree import freeze_tree
from budget_tree.variance import (
    format_variance,
    node_variance,
    original_value,
    variance,
)


class TestVariance:
    def test_increase(self) -> None:
        result = variance(current_value=Decimal("900"), original_value=Decimal("800"))
        assert result == Decimal("12.5")
        assert str(result) == "12.50"

    def test_decrease(self) -> None:
        result = variance(current_value=Decimal("700"), original_value=Decimal("800"))
        assert result == Decimal("-12.5")

    @pytest.mark.parametrize(
        ("current", "expected"),
        [
            (Decimal("11234.67"), Decimal("12.34")),
            (Decimal("8765.33"), Decimal("-12.34")),
            (Decimal("10000.009"), Decimal("0.00")),
        ],
    )
    def test_truncates_toward_zero(self, current: Decimal, expected: Decimal) -> None:
        assert (
            variance(current_value=current, original_value=Decimal("10000")) == expected
        )

    def test_zero_original_returns_zero(self) -> None:
        assert variance(
            current_value=Decimal("250"), original_value=Decimal("0")
        ) == Decimal("0")

    def test_places_are_configurable(self) -> None:
        result = variance(
            current_value=Decimal("11234.67"),
            original_value=Decimal("10000"),
            places=0,
        )
        assert result == Decimal("12")

    def test_huge_change_does_not_overflow_precision(self) -> None:
        result = variance(current_value=Decimal("1e30"), original_value=Decimal("1"))
        assert result == Decimal("1e32")

    def test_many_places_do_not_overflow_precision(self) -> None:
        result = variance(
            current_value=Decimal("900"), original_value=Decimal("800"), places=40
        )
        assert result == Decimal("12.5")

    def test_unchanged_value_is_zero(self) -> None:
        assert variance(
            current_value=Decimal("800"), original_value=Decimal("800")
        ) == Decimal("0")


class TestOriginalValue:
    def test_found(self, sample_tree: nx.DiGraph) -> None:
        original = freeze_tree(tree=sample_tree)
        assert original_value(original=original, node_id="laptops") == Decimal("700")

    def test_missing_returns_none(self, sample_tree: nx.DiGraph) -> None:
        original = freeze_tree(tree=sample_tree)
        assert original_value(original=original, node_id="nonexistent") is None


class TestNodeVariance:
    def test_against_snapshot_after_edit(self, sample_tree: nx.DiGraph) -> None:
        original = freeze_tree(tree=sample_tree)
        tree = allocate(
            tree=sample_tree,
            target="phones",
            amount=Decimal("900"),
            mode=AllocationMode.ABSOLUTE,
        )
        assert node_variance(tree=tree, original=original, node_id="phones") == Decimal(
            "12.50"
        )
        # 1600 against 1500
        assert node_variance(
            tree=tree, original=original, node_id="electronics"
        ) == Decimal("6.66")
        assert node_variance(tree=tree, original=original, node_id="chairs") == 0

    def test_missing_node_returns_none(self, sample_tree: nx.DiGraph) -> None:
        original = freeze_tree(tree=sample_tree)
        assert (
            node_variance(tree=sample_tree, original=original, node_id="ghost") is None
        )


class TestFormatVariance:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("12.50"), "+12.5 %"),
            (Decimal("-12.50"), "-12.5 %"),
            (Decimal("0"), "0 %"),
            (Decimal("0.00"), "0 %"),
            (Decimal("100.00"), "+100 %"),
            (Decimal("6.66"), "+6.66 %"),
        ],
    )
    def test_signed_text(self, value: Decimal, expected: str) -> None:
        assert format_variance(value) == expected
