"""Stone allocation search for awakening upgrades.

Every step in the requested range can be paid with either the character's own
stone or the universal stone. Character stones are a hard cap: an assignment
that spends more than the player holds is discarded. Universal stones are
soft: any demand above the stock is reported as a shortfall instead.

The search is exhaustive (``2 ** n`` assignments for ``n`` steps). That is only
reasonable because the step table has five entries; a longer table needs a DP
over spent amounts instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, Tuple

from awakening.data.awakening_steps import AwakeningStep, steps_between
from awakening.engine.logger import ChannelLogger

Score = Tuple[int, int, int]


class Currency(str, Enum):
    """Stone used to pay for a single step."""

    CHARACTER = "char"
    UNIVERSAL = "uni"


class PreferenceMode(str, Enum):
    """Which stone to hold on to when shortfalls are equal."""

    CONSERVE_UNIVERSAL = "optimal"
    CONSERVE_CHARACTER = "uni_priority"

    @classmethod
    def parse(cls, value: object) -> "PreferenceMode":
        """Accept an enum member, its value, or its name (any case)."""

        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for mode in cls:
            if text == mode.value or text.upper() == mode.name:
                return mode
        raise ValueError(f"Unknown preference mode: {value!r}")


@dataclass(frozen=True)
class StepPayment:
    """A step together with the stone chosen to pay for it."""

    step: AwakeningStep
    currency: Currency


@dataclass(frozen=True)
class AllocationResult:
    """Best assignment for one set of inputs."""

    assignment: Tuple[StepPayment, ...]
    character_used: int
    universal_needed: int
    universal_from_stock: int
    universal_shortfall: int
    remaining_character: int
    remaining_universal: int
    score: Score

    @property
    def fully_funded(self) -> bool:
        return self.universal_shortfall == 0


def enumerate_assignments(steps: Sequence[AwakeningStep]) -> Iterator[Tuple[StepPayment, ...]]:
    """Yield every payment assignment in binary-counter order.

    Bit ``j`` of the counter set means ``steps[j]`` is paid with character
    stones; the all-universal assignment always comes first.
    """

    count = len(steps)
    for mask in range(1 << count):
        yield tuple(
            StepPayment(step, Currency.CHARACTER if (mask >> index) & 1 else Currency.UNIVERSAL)
            for index, step in enumerate(steps)
        )


def score_assignment(
    character_used: int,
    universal_from_stock: int,
    shortfall: int,
    character_stones: int,
    universal_stones: int,
    mode: PreferenceMode,
) -> Score:
    """Lexicographic score for a feasible assignment; lower wins.

    Shortfall always dominates. The second and third entries depend on the
    mode and are intentionally not mirror images of each other: conserving
    universal stones breaks the final tie on leftover character stones, while
    conserving character stones breaks it on unspent universal stock.
    """

    if mode is PreferenceMode.CONSERVE_UNIVERSAL:
        return (shortfall, universal_from_stock, character_stones - character_used)
    return (shortfall, character_used, universal_stones - universal_from_stock)


def solve(
    current_level: int,
    target_level: int,
    character_stones: int,
    universal_stones: int,
    mode: PreferenceMode = PreferenceMode.CONSERVE_UNIVERSAL,
    logger: Optional[ChannelLogger] = None,
) -> Optional[AllocationResult]:
    """Return the cheapest way to reach ``target_level``, or ``None``.

    ``None`` means there is nothing to plan: the target is not above the
    current level. Inputs are expected to be clamped and coerced already.
    """

    if target_level <= current_level:
        return None
    steps = steps_between(current_level, target_level)
    if not steps:
        return None
    mode = PreferenceMode.parse(mode)

    best: Optional[AllocationResult] = None
    for assignment in enumerate_assignments(steps):
        character_used = sum(p.step.cost for p in assignment if p.currency is Currency.CHARACTER)
        universal_needed = sum(p.step.cost for p in assignment if p.currency is Currency.UNIVERSAL)
        if character_used > character_stones:
            continue
        universal_from_stock = min(universal_needed, universal_stones)
        shortfall = max(0, universal_needed - universal_stones)
        score = score_assignment(
            character_used,
            universal_from_stock,
            shortfall,
            character_stones,
            universal_stones,
            mode,
        )
        if best is None or score < best.score:
            best = AllocationResult(
                assignment=assignment,
                character_used=character_used,
                universal_needed=universal_needed,
                universal_from_stock=universal_from_stock,
                universal_shortfall=shortfall,
                remaining_character=character_stones - character_used,
                remaining_universal=max(0, universal_stones - universal_needed),
                score=score,
            )

    # Invariant check, not input validation: mask 0 pays every step with
    # universal stones and spends no character stones, so it always survives
    # the cap filter once the range is non-empty.
    assert best is not None, "no feasible assignment for a non-empty step range"
    if logger and logger.enabled:
        logger.debug(
            "Plan ★%d→★%d (%s): char=%d uni=%d short=%d score=%s",
            current_level,
            target_level,
            mode.value,
            best.character_used,
            best.universal_needed,
            best.universal_shortfall,
            best.score,
        )
    return best


__all__ = [
    "AllocationResult",
    "Currency",
    "PreferenceMode",
    "StepPayment",
    "enumerate_assignments",
    "score_assignment",
    "solve",
]
