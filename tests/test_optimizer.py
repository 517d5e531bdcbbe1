from __future__ import annotations

import itertools

import pytest

from awakening.data.awakening_steps import AWAKENING_STEPS, MAX_LEVEL, MIN_LEVEL, steps_between
from awakening.planner.optimizer import (
    Currency,
    PreferenceMode,
    enumerate_assignments,
    score_assignment,
    solve,
)

CHAR = Currency.CHARACTER
UNI = Currency.UNIVERSAL

VALID_RANGES = [
    (current, target)
    for current in range(MIN_LEVEL, MAX_LEVEL + 1)
    for target in range(MIN_LEVEL, MAX_LEVEL + 1)
    if current < target
]


def _currencies(result):
    return [payment.currency for payment in result.assignment]


def test_step_table_is_a_contiguous_chain():
    assert [step.from_level for step in AWAKENING_STEPS] == [0, 1, 2, 3, 4]
    assert all(step.to_level == step.from_level + 1 for step in AWAKENING_STEPS)
    assert [step.cost for step in AWAKENING_STEPS] == [50, 70, 100, 140, 200]


def test_steps_between_selects_inclusive_range():
    assert [step.cost for step in steps_between(2, 5)] == [100, 140, 200]
    assert steps_between(3, 3) == ()


@pytest.mark.parametrize("level", range(MIN_LEVEL, MAX_LEVEL + 1))
def test_equal_levels_have_nothing_to_plan(level):
    assert solve(level, level, 500, 500, PreferenceMode.CONSERVE_UNIVERSAL) is None
    assert solve(level, level, 500, 500, PreferenceMode.CONSERVE_CHARACTER) is None


def test_target_below_current_has_nothing_to_plan():
    assert solve(4, 1, 100, 100) is None


@pytest.mark.parametrize("current,target", VALID_RANGES)
@pytest.mark.parametrize("mode", list(PreferenceMode))
def test_every_valid_range_has_a_plan(current, target, mode):
    result = solve(current, target, 0, 0, mode)
    assert result is not None
    assert [p.step.from_level for p in result.assignment] == list(range(current, target))
    # With no character stones the only feasible route is all universal.
    assert _currencies(result) == [UNI] * (target - current)


@pytest.mark.parametrize("current,target", VALID_RANGES)
@pytest.mark.parametrize("mode", list(PreferenceMode))
@pytest.mark.parametrize("char_stones,uni_stones", [(0, 0), (90, 0), (150, 60), (333, 1000), (1000, 75)])
def test_result_invariants(current, target, mode, char_stones, uni_stones):
    result = solve(current, target, char_stones, uni_stones, mode)
    assert result.character_used <= char_stones
    assert result.universal_shortfall == max(0, result.universal_needed - uni_stones)
    assert result.universal_from_stock == min(result.universal_needed, uni_stones)
    assert result.remaining_character == char_stones - result.character_used
    assert result.remaining_universal == max(0, uni_stones - result.universal_needed)
    total = sum(step.cost for step in steps_between(current, target))
    assert result.character_used + result.universal_needed == total
    assert result.character_used == sum(p.step.cost for p in result.assignment if p.currency is CHAR)


def test_solve_is_deterministic():
    args = (0, 5, 260, 140, PreferenceMode.CONSERVE_CHARACTER)
    assert solve(*args) == solve(*args)


@pytest.mark.parametrize("current,target", VALID_RANGES)
@pytest.mark.parametrize("mode", list(PreferenceMode))
@pytest.mark.parametrize("uni_stones", [0, 120, 400])
def test_shortfall_never_grows_with_more_character_stones(current, target, mode, uni_stones):
    shortfalls = [
        solve(current, target, char_stones, uni_stones, mode).universal_shortfall
        for char_stones in range(0, 800, 10)
    ]
    assert all(later <= earlier for earlier, later in zip(shortfalls, shortfalls[1:]))


def test_partial_cap_packs_the_largest_step_that_fits():
    result = solve(0, 3, 90, 0, PreferenceMode.CONSERVE_UNIVERSAL)
    assert _currencies(result) == [UNI, CHAR, UNI]
    assert result.character_used == 70
    assert result.universal_needed == 150
    assert result.universal_shortfall == 150
    assert result.remaining_character == 20
    assert not result.fully_funded
    assert result.remaining_universal == 0


def test_shortfall_outranks_mode_preference():
    result = solve(0, 1, 50, 0, PreferenceMode.CONSERVE_CHARACTER)
    assert _currencies(result) == [CHAR]
    assert result.universal_shortfall == 0
    assert result.remaining_character == 0


def test_ample_stock_spends_character_stones_when_saving_universal():
    result = solve(2, 5, 1000, 1000, PreferenceMode.CONSERVE_UNIVERSAL)
    assert [p.step.cost for p in result.assignment] == [100, 140, 200]
    assert _currencies(result) == [CHAR, CHAR, CHAR]
    assert result.universal_shortfall == 0
    assert result.remaining_universal == 1000
    assert result.remaining_character == 560
    assert result.fully_funded


def test_modes_diverge_when_both_stocks_cover_the_route():
    saving_universal = solve(0, 3, 1000, 100, PreferenceMode.CONSERVE_UNIVERSAL)
    keeping_character = solve(0, 3, 1000, 100, PreferenceMode.CONSERVE_CHARACTER)

    assert _currencies(saving_universal) == [CHAR, CHAR, CHAR]
    assert saving_universal.universal_from_stock == 0

    # Universal stock covers the 100 step; the cheaper pair goes on character.
    assert _currencies(keeping_character) == [CHAR, CHAR, UNI]
    assert keeping_character.character_used == 120
    assert keeping_character.universal_from_stock == 100
    assert keeping_character.remaining_universal == 0
    assert keeping_character.remaining_character == 880


def test_character_cap_is_hard():
    result = solve(0, 2, 60, 0, PreferenceMode.CONSERVE_CHARACTER)
    assert _currencies(result) == [CHAR, UNI]
    assert result.universal_shortfall == 70


def test_mode_accepts_raw_values():
    assert solve(0, 3, 90, 0, "optimal") == solve(0, 3, 90, 0, PreferenceMode.CONSERVE_UNIVERSAL)
    assert PreferenceMode.parse("uni_priority") is PreferenceMode.CONSERVE_CHARACTER
    assert PreferenceMode.parse("conserve_universal") is PreferenceMode.CONSERVE_UNIVERSAL
    with pytest.raises(ValueError):
        PreferenceMode.parse("hoard_everything")


def test_enumeration_follows_binary_counter():
    steps = steps_between(0, 2)
    assignments = [tuple(p.currency for p in a) for a in enumerate_assignments(steps)]
    assert assignments == [(UNI, UNI), (CHAR, UNI), (UNI, CHAR), (CHAR, CHAR)]


def test_enumeration_covers_every_assignment_once():
    steps = steps_between(0, 5)
    seen = [tuple(p.currency for p in a) for a in enumerate_assignments(steps)]
    assert len(seen) == 32
    assert set(seen) == set(itertools.product([UNI, CHAR], repeat=5))


def test_score_tiers_differ_per_mode():
    # shortfall, then the mode's conserved stone, then its final tiebreak
    assert score_assignment(70, 30, 5, 100, 40, PreferenceMode.CONSERVE_UNIVERSAL) == (5, 30, 30)
    assert score_assignment(70, 30, 5, 100, 40, PreferenceMode.CONSERVE_CHARACTER) == (5, 70, 10)


def test_score_ordering_is_lexicographic():
    worse_shortfall = score_assignment(0, 0, 1, 1000, 0, PreferenceMode.CONSERVE_UNIVERSAL)
    heavy_but_funded = score_assignment(0, 900, 0, 1000, 900, PreferenceMode.CONSERVE_UNIVERSAL)
    assert heavy_but_funded < worse_shortfall
