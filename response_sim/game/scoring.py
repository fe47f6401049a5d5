"""
Scoring System for the Emergency Response Simulation

Points for a single round, from incident difficulty, unit speed and
response time, plus the flat penalty for sending the wrong unit.
Pure functions - no console dependencies.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from response_sim import config
from response_sim.game.incidents import Incident
from response_sim.game.units import Unit, unit_can_handle

logger = logging.getLogger(__name__)

# Round outcome constants
HANDLED = "handled"
MISMATCH = "mismatch"
SKIPPED = "skipped"


@dataclass(frozen=True)
class RoundResult:
    """Outcome of one resolved round, kept for the debrief."""
    round_number: int
    incident: Incident
    unit: Optional[Unit]
    outcome: str
    response_time_ms: Optional[int]
    base_points: int
    speed_bonus: int
    time_penalty: int
    points_delta: int
    running_score: int


def calculate_score(difficulty: int, unit_speed: int, response_time_ms: int) -> int:
    """
    Compute points earned for a correctly assigned unit.

    Formula:
        base_points  = difficulty * 10
        speed_bonus  = unit_speed // 10
        time_penalty = min(response_time_ms // 200, base_points + speed_bonus)
        points       = max(0, base_points + speed_bonus - time_penalty)

    Args:
        difficulty: Incident difficulty (1-3)
        unit_speed: Unit speed rating (1-100)
        response_time_ms: Elapsed response time in milliseconds

    Returns:
        Points earned (never negative)

    Raises:
        ValueError: If response_time_ms is negative

    Examples:
        >>> calculate_score(2, 60, 0)
        26
        >>> calculate_score(3, 100, 1_000_000)
        0
    """
    base_points, speed_bonus, time_penalty = _score_components(difficulty, unit_speed, response_time_ms)
    return max(0, base_points + speed_bonus - time_penalty)


def _score_components(difficulty: int, unit_speed: int, response_time_ms: int) -> tuple:
    if response_time_ms < 0:
        raise ValueError(f"Invalid response time: {response_time_ms}ms. Must be non-negative")

    base_points = difficulty * config.POINTS_PER_DIFFICULTY
    speed_bonus = unit_speed // config.SPEED_BONUS_DIVISOR
    time_penalty = response_time_ms // config.RESPONSE_TIME_PENALTY_MS

    # Cap penalty so a slow response cannot push the round below zero
    time_penalty = min(time_penalty, base_points + speed_bonus)

    return base_points, speed_bonus, time_penalty


def resolve_assignment(
    round_number: int,
    incident: Incident,
    unit: Unit,
    response_time_ms: int,
    running_score: int
) -> RoundResult:
    """
    Score a unit assignment and apply it to the running score.

    A unit that cannot handle the incident costs a flat MISMATCH_PENALTY
    and response_time_ms is ignored. The running score has no floor.

    Args:
        round_number: 1-based round number
        incident: Current incident
        unit: Unit the dispatcher selected
        response_time_ms: Elapsed response time in milliseconds
        running_score: Score before this round

    Returns:
        RoundResult with the breakdown and updated running score
    """
    if not unit_can_handle(unit, incident.type):
        delta = -config.MISMATCH_PENALTY
        logger.debug(f"Round {round_number}: {unit.name} cannot handle {incident.type}, {delta} points")
        return RoundResult(
            round_number=round_number,
            incident=incident,
            unit=unit,
            outcome=MISMATCH,
            response_time_ms=None,
            base_points=0,
            speed_bonus=0,
            time_penalty=0,
            points_delta=delta,
            running_score=running_score + delta
        )

    base_points, speed_bonus, time_penalty = _score_components(
        incident.difficulty,
        unit.speed,
        response_time_ms
    )
    points = max(0, base_points + speed_bonus - time_penalty)
    logger.debug(
        f"Round {round_number}: base={base_points} speed_bonus={speed_bonus} "
        f"time_penalty={time_penalty} points={points}"
    )

    return RoundResult(
        round_number=round_number,
        incident=incident,
        unit=unit,
        outcome=HANDLED,
        response_time_ms=response_time_ms,
        base_points=base_points,
        speed_bonus=speed_bonus,
        time_penalty=time_penalty,
        points_delta=points,
        running_score=running_score + points
    )


def skip_round(round_number: int, incident: Incident, running_score: int) -> RoundResult:
    """Record a round with no unit selected: no gain, no penalty."""
    return RoundResult(
        round_number=round_number,
        incident=incident,
        unit=None,
        outcome=SKIPPED,
        response_time_ms=None,
        base_points=0,
        speed_bonus=0,
        time_penalty=0,
        points_delta=0,
        running_score=running_score
    )
