"""
Capability & Scoring Test

Checks the unit capability rules and the per-round scoring formula.
"""

import pytest

from response_sim.game.incidents import Incident
from response_sim.game.scoring import (
    calculate_score, resolve_assignment, skip_round, HANDLED, MISMATCH, SKIPPED
)
from response_sim.game.units import (
    Category, Unit, can_handle, unit_can_handle, build_roster, annotate_roster, narrate_response
)


def test_capability_rules():
    """Each category answers its own incident types, case-insensitively."""
    assert can_handle(Category.POLICE, "crime")
    assert can_handle(Category.POLICE, "CRIME")
    assert can_handle(Category.FIRE, "Fire")
    assert can_handle(Category.MEDICAL, "mEdIcAl")
    assert can_handle(Category.SEARCH_RESCUE, "Search")
    assert can_handle(Category.SEARCH_RESCUE, "Rescue")
    print("   [OK] Matching categories accepted")

    assert not can_handle(Category.POLICE, "Fire")
    assert not can_handle(Category.FIRE, "Rescue")
    assert not can_handle(Category.MEDICAL, "Crime")
    assert not can_handle(Category.SEARCH_RESCUE, "Medical")
    print("   [OK] Mismatched categories rejected")

    # No fuzzy matching
    assert not can_handle(Category.FIRE, "Fires")
    assert not can_handle(Category.POLICE, " crime")
    assert not can_handle(Category.SEARCH_RESCUE, "Search and Rescue")
    print("   [OK] No partial matches")


def test_default_roster():
    roster = build_roster()
    assert len(roster) == 7
    assert roster[0] == Unit("Police Unit 1", Category.POLICE, 80)
    assert roster[2] == Unit("Firefighter Unit 1", Category.FIRE, 60)
    assert roster[6] == Unit("SAR Unit 1", Category.SEARCH_RESCUE, 70)
    print(f"   [OK] Roster: {[u.name for u in roster]}")

    annotated = annotate_roster(roster, "Rescue")
    assert [number for number, _, _ in annotated] == [1, 2, 3, 4, 5, 6, 7]
    assert [capable for _, _, capable in annotated] == [False] * 6 + [True]
    print("   [OK] Only SAR unit can handle a rescue")


def test_unit_validation():
    with pytest.raises(ValueError):
        Unit("Too Slow", Category.POLICE, 0)
    with pytest.raises(ValueError):
        Unit("Too Fast", Category.FIRE, 101)
    with pytest.raises(ValueError):
        build_roster([("Coast Guard 1", "coast_guard", 50)])
    print("   [OK] Invalid units rejected")

    unit = Unit("Engine 9", Category.FIRE, 1)
    with pytest.raises(AttributeError):
        unit.speed = 50
    print("   [OK] Units are immutable")


def test_narration():
    police = Unit("Police Unit 1", Category.POLICE, 80)
    sar = Unit("SAR Unit 1", Category.SEARCH_RESCUE, 70)
    assert narrate_response(police, "Downtown") == "Police Unit 1 responding to a crime at Downtown."
    assert narrate_response(sar, "Lake") == "SAR Unit 1 is conducting a search and rescue at Lake."
    assert unit_can_handle(sar, "search")


def test_score_no_time_penalty():
    """score(d, s, 0) == d*10 + s//10"""
    for difficulty in (1, 2, 3):
        for speed in (1, 9, 10, 59, 60, 99, 100):
            assert calculate_score(difficulty, speed, 0) == difficulty * 10 + speed // 10
    assert calculate_score(2, 60, 0) == 26
    print("   [OK] Zero elapsed time gives full points")


def test_score_time_penalty():
    assert calculate_score(2, 60, 199) == 26
    assert calculate_score(2, 60, 200) == 25
    assert calculate_score(2, 60, 1000) == 21
    print("   [OK] One point lost per 200ms")

    for difficulty in (1, 2, 3):
        for speed in (1, 50, 100):
            assert calculate_score(difficulty, speed, 1_000_000) == 0
            for t in (0, 1, 200, 3_999, 10_000, 50_000):
                assert calculate_score(difficulty, speed, t) >= 0
    print("   [OK] Score never negative, slow responses floor at 0")

    with pytest.raises(ValueError):
        calculate_score(1, 50, -1)


def test_resolve_assignment():
    firefighter = Unit("Firefighter Unit 1", Category.FIRE, 60)
    police = Unit("Police Unit 1", Category.POLICE, 80)

    result = resolve_assignment(1, Incident("Fire", "Downtown", 2), firefighter, 0, 10)
    assert result.outcome == HANDLED
    assert result.base_points == 20
    assert result.speed_bonus == 6
    assert result.time_penalty == 0
    assert result.points_delta == 26
    assert result.running_score == 36
    print("   [OK] Firefighter on Fire (d=2) earns +26")

    for difficulty in (1, 2, 3):
        result = resolve_assignment(1, Incident("Fire", "Lake", difficulty), police, 0, 0)
        assert result.outcome == MISMATCH
        assert result.points_delta == -5
        assert result.running_score == -5
    print("   [OK] Police on Fire costs exactly 5 points, running score may go negative")

    # Response time is ignored for a mismatch
    result = resolve_assignment(2, Incident("Medical", "Lake", 3), police, 1_000_000, 3)
    assert result.points_delta == -5
    assert result.response_time_ms is None

    result = skip_round(3, Incident("Crime", "Lake", 1), 12)
    assert result.outcome == SKIPPED
    assert result.points_delta == 0
    assert result.running_score == 12
    print("   [OK] Skipped round leaves score unchanged")
