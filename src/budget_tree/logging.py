"""Project-wide logging utilities that honour `EngineConfig`."""

import logging

from budget_tree.config import EngineConfig, runtime_config

__all__ = ["get_logger"]


def get_logger(
    name: str | None = None,
    *,
    config: EngineConfig | None = None,
) -> logging.Logger:
    """Return a logger configured according to the runtime configuration."""
    logger_name = "budget_tree" if name is None else f"budget_tree.{name}"
    runtime = runtime_config() if config is None else config
    logger = logging.getLogger(logger_name)
    logger.setLevel(runtime.log_level)
    return logger
