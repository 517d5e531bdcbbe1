"""Editable planner state that feeds the optimizer."""
from __future__ import annotations

import re
from typing import List, Optional, Union

from awakening.data.awakening_steps import MAX_LEVEL, MIN_LEVEL
from awakening.engine.logger import ChannelLogger
from awakening.planner.optimizer import AllocationResult, PreferenceMode, solve
from awakening.ui.advice import pro_tip

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(int(level), MAX_LEVEL))


def coerce_stock(value: Union[int, str, None]) -> int:
    """Turn free-text stone entry into a non-negative integer.

    Leading digits are parsed the way a browser number field does
    (``"120abc"`` is 120); anything else, including negatives, becomes 0.
    """

    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(0, value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    return max(0, int(match.group(1)))


class AwakeningPlannerModel:
    """Hold planner inputs and recompute the allocation on demand."""

    def __init__(
        self,
        character: str = "",
        current_level: int = 0,
        target_level: int = 3,
        character_stones: Union[int, str] = 0,
        universal_stones: Union[int, str] = 0,
        mode: Union[PreferenceMode, str] = PreferenceMode.CONSERVE_UNIVERSAL,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self.character = character
        self.current_level = clamp_level(current_level)
        self.target_level = clamp_level(target_level)
        self.character_stones = coerce_stock(character_stones)
        self.universal_stones = coerce_stock(universal_stones)
        self.mode = PreferenceMode.parse(mode)
        self.logger = logger

    # ------------------------------------------------------------------
    # Level selectors
    # ------------------------------------------------------------------
    def set_current_level(self, level: int) -> None:
        level = clamp_level(level)
        self.current_level = level
        if self.target_level <= level:
            self.target_level = min(MAX_LEVEL, level + 1)

    def set_target_level(self, level: int) -> None:
        self.target_level = clamp_level(level)

    def target_choices(self) -> List[int]:
        return [level for level in range(MIN_LEVEL + 1, MAX_LEVEL + 1) if level > self.current_level]

    def step_target(self, delta: int) -> None:
        """Move the target through the levels above the current one."""

        choices = self.target_choices()
        if not choices:
            return
        if self.target_level not in choices:
            self.target_level = choices[0]
            return
        index = choices.index(self.target_level) + delta
        self.target_level = choices[max(0, min(index, len(choices) - 1))]

    # ------------------------------------------------------------------
    # Stock and mode
    # ------------------------------------------------------------------
    def set_character_stones(self, value: Union[int, str, None]) -> None:
        self.character_stones = coerce_stock(value)

    def set_universal_stones(self, value: Union[int, str, None]) -> None:
        self.universal_stones = coerce_stock(value)

    def set_mode(self, mode: Union[PreferenceMode, str]) -> None:
        self.mode = PreferenceMode.parse(mode)

    def toggle_mode(self) -> PreferenceMode:
        if self.mode is PreferenceMode.CONSERVE_UNIVERSAL:
            self.mode = PreferenceMode.CONSERVE_CHARACTER
        else:
            self.mode = PreferenceMode.CONSERVE_UNIVERSAL
        return self.mode

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def plan(self) -> Optional[AllocationResult]:
        return solve(
            self.current_level,
            self.target_level,
            self.character_stones,
            self.universal_stones,
            self.mode,
            logger=self.logger,
        )

    def advice(self) -> str:
        return pro_tip(self.plan())


__all__ = ["AwakeningPlannerModel", "clamp_level", "coerce_stock"]
