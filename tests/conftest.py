from collections.abc import Iterator
from typing import Any

import networkx as nx
import pytest

from budget_tree.config import EngineConfig, reset_runtime_config
from budget_tree.sample_data import SAMPLE_ROWS
from budget_tree.tree import create_tree


@pytest.fixture(autouse=True)
def _fresh_runtime_config() -> Iterator[None]:
    reset_runtime_config()
    yield
    reset_runtime_config()


@pytest.fixture
def sample_rows() -> list[dict[str, Any]]:
    """Electronics(1500) <- phones(800), laptops(700); furniture(1000) <- ..."""
    return SAMPLE_ROWS


@pytest.fixture
def sample_tree(sample_rows: list[dict[str, Any]]) -> nx.DiGraph:
    return create_tree(rows=sample_rows)


@pytest.fixture
def nested_rows(sample_rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Three levels: total(2500) <- electronics(1500), furniture(1000)."""
    return [{"id": "total", "label": "Total", "value": 2500, "children": sample_rows}]


@pytest.fixture
def nested_tree(nested_rows: list[dict[str, Any]]) -> nx.DiGraph:
    return create_tree(rows=nested_rows)


@pytest.fixture
def zero_children_tree() -> nx.DiGraph:
    """Parent whose children are both zero."""
    return create_tree(
        rows=[
            {
                "id": "reserve",
                "value": 0,
                "children": [
                    {"id": "a", "value": 0},
                    {"id": "b", "value": 0},
                ],
            }
        ]
    )


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(log_level="DEBUG", variance_places=2)
