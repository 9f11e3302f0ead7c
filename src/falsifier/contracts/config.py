"""Run configuration schema.

Uses Pydantic with frozen (immutable) models. Constructing RunConfig
directly raises pydantic.ValidationError on bad input; the loaders in
falsifier.core.config and the runner wrap that into ConfigurationError.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from falsifier.contracts.enums import SizeSchedule
from falsifier.contracts.errors import ConfigurationError

DEFAULT_TRIAL_COUNT = 100
DEFAULT_MAX_SIZE = 100
DEFAULT_MAX_SHRINK_STEPS = 1000


class RunConfig(BaseModel):
    """Settings for a single property run."""

    model_config = {"frozen": True, "extra": "forbid"}

    seed: int | None = Field(
        default=None,
        ge=0,
        description="Seed for the run. Generated and reported when absent.",
    )
    trial_count: int = Field(
        default=DEFAULT_TRIAL_COUNT,
        gt=0,
        description="Number of generated inputs to test",
    )
    max_size: int = Field(
        default=DEFAULT_MAX_SIZE,
        gt=0,
        description="Upper bound of the size parameter reached by the last trial",
    )
    max_shrink_steps: int = Field(
        default=DEFAULT_MAX_SHRINK_STEPS,
        gt=0,
        description="Maximum property evaluations spent shrinking a counterexample",
    )
    size_schedule: SizeSchedule = Field(
        default=SizeSchedule.LINEAR,
        description="How size grows across trials: 'linear' or 'log'",
    )
    workers: int = Field(
        default=1,
        gt=0,
        description="Threads used for trials and shrink candidates (1 = sequential)",
    )
    preset_name: str | None = Field(
        default=None,
        description="Preset this configuration was loaded from, if any",
    )


def coerce_run_config(config: RunConfig | Mapping[str, Any] | None, **overrides: Any) -> RunConfig:
    """Build a RunConfig from a model, a mapping or nothing, plus keyword overrides.

    Raises:
        ConfigurationError: If the resulting configuration is invalid.
    """
    if isinstance(config, RunConfig):
        base: dict[str, Any] = config.model_dump(exclude_unset=True)
    elif config is None:
        base = {}
    else:
        base = dict(config)
    base.update(overrides)
    try:
        return RunConfig(**base)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid run configuration: {exc}") from exc
