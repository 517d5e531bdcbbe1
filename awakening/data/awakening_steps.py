"""Static awakening step table."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

MIN_LEVEL = 0
MAX_LEVEL = 5


@dataclass(frozen=True)
class AwakeningStep:
    """Cost to advance one star, payable with either stone type."""

    from_level: int
    to_level: int
    cost: int
    label: str


AWAKENING_STEPS: Tuple[AwakeningStep, ...] = (
    AwakeningStep(from_level=0, to_level=1, cost=50, label="★1 Unlock"),
    AwakeningStep(from_level=1, to_level=2, cost=70, label="★2 Enhance"),
    AwakeningStep(from_level=2, to_level=3, cost=100, label="★3 Special Move Enhance"),
    AwakeningStep(from_level=3, to_level=4, cost=140, label="★4 Enhance"),
    AwakeningStep(from_level=4, to_level=5, cost=200, label="★5 Full Awakening"),
)


def steps_between(current_level: int, target_level: int) -> Tuple[AwakeningStep, ...]:
    """Return the steps needed to go from ``current_level`` to ``target_level``."""

    return tuple(
        step
        for step in AWAKENING_STEPS
        if step.from_level >= current_level and step.to_level <= target_level
    )


__all__ = ["AWAKENING_STEPS", "AwakeningStep", "MAX_LEVEL", "MIN_LEVEL", "steps_between"]
