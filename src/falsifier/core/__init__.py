"""Core infrastructure: random streams, configuration loading and logging."""

from falsifier.core.config import deep_merge, list_presets, load_preset, load_run_config
from falsifier.core.logging import carry_context, configure_logging, get_logger, run_context
from falsifier.core.random_stream import RandomStream, fresh_seed

__all__ = [
    "RandomStream",
    "carry_context",
    "configure_logging",
    "deep_merge",
    "fresh_seed",
    "get_logger",
    "list_presets",
    "load_preset",
    "load_run_config",
    "run_context",
]
