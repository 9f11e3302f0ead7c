# src/falsifier/core/logging.py
"""Structured logging for property runs.

Engine modules log through get_logger(); the runner binds the run's seed
with run_context() so every trial and shrink event carries the seed needed
to replay it. Work submitted to a thread pool is wrapped with
carry_context() so events emitted on worker threads keep that binding.

configure_logging() is optional. Without it structlog's defaults apply;
with it, structlog events and stdlib records from the code under test are
rendered by one ProcessorFormatter, as console lines or JSON.
"""

import contextvars
import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from falsifier.contracts.errors import ConfigurationError

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _strip_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # ProcessorFormatter always sets both keys.
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]


def _renderers(json_output: bool) -> list[Any]:
    if json_output:
        return [_strip_formatter_keys, structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [_strip_formatter_keys, structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging to stdout in one format.

    Args:
        json_output: One JSON object per line instead of console output.
        level: DEBUG adds one event per trial and per accepted shrink.

    Raises:
        ConfigurationError: If level is not a standard level name.
    """
    level_name = level.upper()
    if level_name not in _LEVELS:
        raise ConfigurationError(f"Unknown log level {level!r}, expected one of {', '.join(_LEVELS)}")

    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Not cached: tests reconfigure between cases.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=_renderers(json_output), foreign_pre_chain=pre_chain))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level_name))


def get_logger(name: str) -> Any:
    """Logger for an engine module, resolved lazily against the current configuration."""
    return structlog.get_logger(name)


@contextmanager
def run_context(**values: Any) -> Iterator[None]:
    """Bind values to every event logged inside the block, then restore."""
    with structlog.contextvars.bound_contextvars(**values):
        yield


def carry_context[**P, R](fn: Callable[P, R]) -> Callable[P, R]:
    """Wrap fn so that calls on pool threads see the caller's bound context."""
    context = contextvars.copy_context()

    def _call(*args: P.args, **kwargs: P.kwargs) -> R:
        # A Context can only be entered by one thread at a time.
        return context.copy().run(fn, *args, **kwargs)

    return _call
