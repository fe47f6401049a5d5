"""
Emergency Response Simulation - Console UI

Drives the round loop over the game state machine. Input, output,
randomness and timing are all passed in so a scripted run is
reproducible.
"""

import logging
import random
import time
from typing import Callable, List, Optional

from response_sim import config
from response_sim.game.debrief import build_round_log, coaching_feedback, summarize_rounds
from response_sim.game.game_state import (
    start_new_game, present_incident, parse_selection, resolve_round, advance_round,
    AWAITING_INCIDENT, ENDED, GameState
)
from response_sim.game.incidents import Incident, generate_incident, describe_incident
from response_sim.game.scoring import HANDLED, MISMATCH
from response_sim.game.units import Unit, annotate_roster, build_roster, narrate_response, unit_can_handle

logger = logging.getLogger(__name__)


def _read_line(prompt: str) -> Optional[str]:
    try:
        return input(prompt)
    except EOFError:
        return None


def render_roster(state: GameState, output_fn: Callable[[str], None]):
    """Print the unit menu with capability annotations for the current incident."""
    output_fn("\nAvailable Units:")
    for number, unit, capable in annotate_roster(state.roster, state.incident.type):
        output_fn(
            f"{number}. {unit.name} ({unit.category.label}, Speed: {unit.speed}) "
            f"- Can Handle: {'Yes' if capable else 'No'}"
        )


def prompt_selection(
    state: GameState,
    input_fn: Callable[[str], Optional[str]],
    output_fn: Callable[[str], None]
) -> Optional[int]:
    """
    Ask the dispatcher for a unit.

    Invalid entries forfeit the round: a diagnostic is shown and None returned.

    Returns:
        0-based roster index, or None if skipped or invalid
    """
    raw = input_fn("Choose a unit by number (or 0 to skip): ")
    try:
        return parse_selection(raw, len(state.roster))
    except ValueError as e:
        logger.warning(f"Round {state.round_number}: invalid selection ({e})")
        output_fn("Invalid input.")
        return None


def dispatch_unit(
    unit: Unit,
    location: str,
    clock: Callable[[], float],
    output_fn: Callable[[str], None]
) -> int:
    """
    Simulate a unit's response and measure how long it took.

    Returns:
        Elapsed response time in whole milliseconds
    """
    start = clock()
    output_fn(narrate_response(unit, location))
    elapsed = clock() - start
    return max(0, int(elapsed * 1000))


def play_round(
    state: GameState,
    rng: random.Random,
    input_fn: Callable[[str], Optional[str]],
    output_fn: Callable[[str], None],
    clock: Callable[[], float],
    incident_fn: Callable[[random.Random], Incident] = generate_incident
) -> GameState:
    """
    Play one full round: incident, selection, resolution.

    Args:
        state: GameState in AWAITING_INCIDENT phase
        incident_fn: Builds the round's incident from the random source

    Returns:
        GameState in RESOLVED phase
    """
    output_fn(f"\n--- Round {state.round_number} ---")
    state = present_incident(state, incident_fn(rng))
    output_fn(describe_incident(state.incident))

    render_roster(state, output_fn)
    unit_index = prompt_selection(state, input_fn, output_fn)

    if unit_index is None:
        state = resolve_round(state, None)
        output_fn("No unit selected for this incident.")
    else:
        unit = state.roster[unit_index]
        response_time_ms = 0
        # Only a capable unit actually responds
        if unit_can_handle(unit, state.incident.type):
            response_time_ms = dispatch_unit(unit, state.incident.location, clock, output_fn)
        state = resolve_round(state, unit_index, response_time_ms)

        result = state.history[-1]
        if result.outcome == HANDLED:
            output_fn(f"Response Time: {result.response_time_ms}ms. Earned +{result.points_delta} points.")
        elif result.outcome == MISMATCH:
            output_fn(f"The {unit.name} cannot handle this type of incident.")
            output_fn(f"{result.points_delta} points.")

    output_fn(f"Current Score: {state.score}")
    return state


def render_debrief(state: GameState, output_fn: Callable[[str], None]):
    """Print the round log table and coaching feedback."""
    summary = summarize_rounds(state.history)
    output_fn("\nRound Log:")
    output_fn(build_round_log(state.history).to_string(index=False))
    output_fn(
        f"\nHandled: {summary['handled']}  Mismatched: {summary['mismatched']}  "
        f"Skipped: {summary['skipped']}  Points earned: {summary['points_earned']}  "
        f"Penalties: {summary['penalties']}"
    )
    for note in coaching_feedback(summary):
        output_fn(f"- {note}")


def run_simulation(
    roster: Optional[List[Unit]] = None,
    rng: Optional[random.Random] = None,
    input_fn: Callable[[str], Optional[str]] = _read_line,
    output_fn: Callable[[str], None] = print,
    clock: Callable[[], float] = time.perf_counter,
    incident_fn: Callable[[random.Random], Incident] = generate_incident,
    num_rounds: int = config.NUM_ROUNDS,
    show_debrief: bool = True
) -> GameState:
    """
    Run the full simulation from the first round to the final score.

    Args:
        roster: Units to dispatch from (default: config.DEFAULT_ROSTER)
        rng: Random source for incidents (default: unseeded random.Random)
        input_fn: Reads one line given a prompt; returns None on end of input
        output_fn: Writes one line of game text
        clock: Monotonic clock in seconds used to time responses
        incident_fn: Builds each round's incident from rng
        num_rounds: Number of rounds to play
        show_debrief: Print the round log after the final score

    Returns:
        GameState in ENDED phase
    """
    if roster is None:
        roster = build_roster()
    if rng is None:
        rng = random.Random()

    state = start_new_game(roster, num_rounds)
    logger.info(f"Starting simulation: {len(state.roster)} units, {state.num_rounds} rounds")

    output_fn("Emergency Response Simulation")
    output_fn("----------------------------")

    while state.phase != ENDED:
        if state.phase != AWAITING_INCIDENT:
            raise ValueError(f"Unexpected phase between rounds: {state.phase}")
        state = play_round(state, rng, input_fn, output_fn, clock, incident_fn)
        state = advance_round(state)

    output_fn("\n--- Simulation Ended ---")
    output_fn(f"Final Score: {state.score}")
    logger.info(f"Simulation ended with score {state.score}")

    if show_debrief:
        render_debrief(state, output_fn)

    return state
