"""Plain-text rendering of a plan for the console and the scene."""
from __future__ import annotations

from typing import List, Optional

from awakening.planner.optimizer import AllocationResult, Currency, PreferenceMode, StepPayment
from awakening.ui.advice import pro_tip

CURRENCY_LABELS = {
    Currency.CHARACTER: "CHARACTER",
    Currency.UNIVERSAL: "UNIVERSAL",
}

MODE_LABELS = {
    PreferenceMode.CONSERVE_UNIVERSAL: "Save universal stones (spend character first)",
    PreferenceMode.CONSERVE_CHARACTER: "Keep character stones (spend universal first)",
}


def format_step(payment: StepPayment) -> str:
    step = payment.step
    return (
        f"★{step.from_level} → ★{step.to_level}  {step.label:<24} "
        f"cost {step.cost:>4}  {CURRENCY_LABELS[payment.currency]}"
    )


def format_plan(
    result: Optional[AllocationResult],
    mode: PreferenceMode,
    *,
    character: str = "",
    tip: Optional[str] = None,
) -> List[str]:
    """Return report lines; ``tip`` overrides the fixed advice."""

    lines: List[str] = []
    if character:
        lines.append(f"Character: {character}")
    lines.append(f"Strategy: {MODE_LABELS[mode]}")
    if result is None:
        lines.append("No awakening steps in range.")
    else:
        lines.append(f"Universal stones still needed: {result.universal_shortfall}")
        lines.append("Route:")
        lines.extend(f"  {format_step(payment)}" for payment in result.assignment)
        lines.append(
            f"Character stones: use {result.character_used}, {result.remaining_character} left"
        )
        lines.append(
            f"Universal stones: need {result.universal_needed}, "
            f"{result.universal_from_stock} from stock, {result.remaining_universal} left"
        )
    lines.append(f"Advice: {tip or pro_tip(result)}")
    return lines


__all__ = ["CURRENCY_LABELS", "MODE_LABELS", "format_plan", "format_step"]
