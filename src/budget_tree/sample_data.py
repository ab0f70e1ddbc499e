"""Demo budget used by examples and tests."""

from typing import Any, Final

from budget_tree.config import EngineConfig
from budget_tree.engine import AllocationEngine

__all__ = [
    "SAMPLE_ROWS",
    "sample_engine",
]

SAMPLE_ROWS: Final[list[dict[str, Any]]] = [
    {
        "id": "electronics",
        "label": "Electronics",
        "value": 1500,
        "children": [
            {"id": "phones", "label": "Phones", "value": 800},
            {"id": "laptops", "label": "Laptops", "value": 700},
        ],
    },
    {
        "id": "furniture",
        "label": "Furniture",
        "value": 1000,
        "children": [
            {"id": "tables", "label": "Tables", "value": 300},
            {"id": "chairs", "label": "Chairs", "value": 700},
        ],
    },
]


def sample_engine(*, config: EngineConfig | None = None) -> AllocationEngine:
    """Return a fresh engine loaded with `SAMPLE_ROWS`."""
    return AllocationEngine.initialize(SAMPLE_ROWS, config=config)
