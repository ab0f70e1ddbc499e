"""Runtime configuration for the allocation engine."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

__all__ = [
    "EngineConfig",
    "reset_runtime_config",
    "runtime_config",
]

LOG_LEVEL_ENV: Final = "BUDGET_TREE_LOG_LEVEL"
VARIANCE_PLACES_ENV: Final = "BUDGET_TREE_VARIANCE_PLACES"

_SUPPORTED_LOG_LEVELS: Final = frozenset(
    {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
)


def _normalise_log_level(raw: str | None) -> str:
    if raw is None or not raw.strip():
        return "WARNING"
    level = raw.strip().upper()
    if level not in _SUPPORTED_LOG_LEVELS:
        msg = f"unsupported log level {raw!r}, expected one of {sorted(_SUPPORTED_LOG_LEVELS)}"
        raise ValueError(msg)
    return level


def _parse_places(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return 2
    try:
        places = int(raw)
    except ValueError as exc:
        msg = f"invalid integer value {raw!r} for {VARIANCE_PLACES_ENV}"
        raise ValueError(msg) from exc
    if places < 0:
        msg = f"{VARIANCE_PLACES_ENV} must not be negative, got {places}"
        raise ValueError(msg)
    return places


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings shared by every engine in the process.

    Attributes:
        log_level: Level name applied to the `budget_tree` loggers.
        variance_places: Decimal places kept when truncating variances.
    """

    log_level: str = "WARNING"
    variance_places: int = 2

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a configuration from `BUDGET_TREE_*` environment variables.

        Raises:
            ValueError: If a variable holds an unsupported value.
        """
        return cls(
            log_level=_normalise_log_level(os.getenv(LOG_LEVEL_ENV)),
            variance_places=_parse_places(os.getenv(VARIANCE_PLACES_ENV)),
        )


@lru_cache(maxsize=None)
def runtime_config() -> EngineConfig:
    """Return the process-wide configuration, read once from the environment."""
    return EngineConfig.from_env()


def reset_runtime_config() -> None:
    """Forget the cached configuration so the environment is read again."""
    runtime_config.cache_clear()
