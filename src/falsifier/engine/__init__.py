"""Run engine: size schedule, property evaluation, shrinking and the runner."""

from falsifier.engine.evaluation import Evaluation, Property, evaluate
from falsifier.engine.runner import PropertyRunner, TrialOutcome, run_property, trial_stream
from falsifier.engine.schedule import size_for_trial
from falsifier.engine.shrinker import ShrinkOutcome, Shrinker, shrink

__all__ = [
    "Evaluation",
    "Property",
    "PropertyRunner",
    "ShrinkOutcome",
    "Shrinker",
    "TrialOutcome",
    "evaluate",
    "run_property",
    "shrink",
    "size_for_trial",
    "trial_stream",
]
