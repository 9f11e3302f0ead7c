# src/falsifier/engine/schedule.py
"""Size schedule across the trials of a run.

Size is a pure function of the trial index, passed explicitly to each
trial, never stored as mutable state. Both schedules use integer arithmetic
only, start at 0 for the first trial and reach max_size on the last one.

- linear: grows evenly, max_size * index // (trial_count - 1).
- log: grows with the bit length of the trial number, reaching large sizes
  after a handful of trials and spending most of the run near max_size.
"""

from falsifier.contracts.enums import SizeSchedule


def size_for_trial(index: int, trial_count: int, max_size: int, schedule: SizeSchedule = SizeSchedule.LINEAR) -> int:
    """Size parameter for a trial.

    Args:
        index: Zero-based trial index, < trial_count.
        trial_count: Trials in the run.
        max_size: Size of the final trial.
        schedule: Growth curve.

    Returns:
        Size in [0, max_size], non-decreasing in index.
    """
    if trial_count <= 1:
        return max_size
    if schedule == SizeSchedule.LOG:
        if index == 0:
            return 0
        return max_size * (index + 1).bit_length() // trial_count.bit_length()
    return max_size * index // (trial_count - 1)
