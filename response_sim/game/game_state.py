"""
Round State Machine for the Emergency Response Simulation

State transitions for the round loop. Each round moves through
AWAITING_INCIDENT -> AWAITING_SELECTION -> RESOLVED, and the game ends
after the last round.
Pure functions - no console dependencies.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from response_sim import config
from response_sim.game.incidents import Incident
from response_sim.game.scoring import RoundResult, resolve_assignment, skip_round
from response_sim.game.units import Unit

# Round phase constants
AWAITING_INCIDENT = "AWAITING_INCIDENT"
AWAITING_SELECTION = "AWAITING_SELECTION"
RESOLVED = "RESOLVED"
ENDED = "ENDED"


@dataclass
class GameState:
    """Game state for one run. Transitions return a new state."""
    roster: Tuple[Unit, ...]
    phase: str
    round_number: int = 1
    num_rounds: int = config.NUM_ROUNDS
    score: int = 0
    incident: Optional[Incident] = None
    history: List[RoundResult] = field(default_factory=list)


def start_new_game(roster: List[Unit], num_rounds: int = config.NUM_ROUNDS) -> GameState:
    """
    Initialize a new game.

    Args:
        roster: Units available for every round
        num_rounds: Number of rounds to play

    Returns:
        GameState in AWAITING_INCIDENT phase with score 0

    Raises:
        ValueError: If roster is empty or num_rounds < 1
    """
    if not roster:
        raise ValueError("Cannot start a game with an empty roster")
    if num_rounds < 1:
        raise ValueError(f"Invalid num_rounds: {num_rounds}. Must be at least 1")

    return GameState(
        roster=tuple(roster),
        phase=AWAITING_INCIDENT,
        round_number=1,
        num_rounds=num_rounds,
        score=0,
        incident=None,
        history=[]
    )


def present_incident(state: GameState, incident: Incident) -> GameState:
    """
    Attach the round's incident and wait for the dispatcher's choice.

    Raises:
        ValueError: If not in AWAITING_INCIDENT phase
    """
    if state.phase != AWAITING_INCIDENT:
        raise ValueError(f"Can only present an incident in {AWAITING_INCIDENT} phase, currently in {state.phase}")

    return GameState(
        roster=state.roster,
        phase=AWAITING_SELECTION,
        round_number=state.round_number,
        num_rounds=state.num_rounds,
        score=state.score,
        incident=incident,
        history=state.history.copy()
    )


def parse_selection(raw: Optional[str], roster_size: int) -> Optional[int]:
    """
    Parse the dispatcher's menu entry.

    Args:
        raw: Text entered at the prompt (None on end of input)
        roster_size: Number of units in the menu

    Returns:
        0-based roster index, or None for the skip choice

    Raises:
        ValueError: If the entry is not an integer or is out of range
    """
    if raw is None:
        raise ValueError("No input received")

    try:
        choice = int(raw.strip())
    except ValueError:
        raise ValueError(f"Not a number: {raw!r}")

    if choice == config.SKIP_CHOICE:
        return None
    if not 1 <= choice <= roster_size:
        raise ValueError(f"Choice {choice} out of range. Must be 1-{roster_size} or {config.SKIP_CHOICE} to skip")

    return choice - 1


def resolve_round(
    state: GameState,
    unit_index: Optional[int],
    response_time_ms: int = 0
) -> GameState:
    """
    Score the round and record it in history.

    Args:
        state: Current game state
        unit_index: 0-based roster index, or None if no unit was selected
        response_time_ms: Measured response time (ignored when skipped or mismatched)

    Returns:
        New GameState in RESOLVED phase with updated score

    Raises:
        ValueError: If not in AWAITING_SELECTION phase or unit_index is out of range
    """
    if state.phase != AWAITING_SELECTION:
        raise ValueError(f"Can only resolve a round in {AWAITING_SELECTION} phase, currently in {state.phase}")

    if unit_index is None:
        result = skip_round(state.round_number, state.incident, state.score)
    else:
        if not 0 <= unit_index < len(state.roster):
            raise ValueError(f"Unit index {unit_index} out of range for roster of {len(state.roster)}")
        result = resolve_assignment(
            state.round_number,
            state.incident,
            state.roster[unit_index],
            response_time_ms,
            state.score
        )

    new_history = state.history.copy()
    new_history.append(result)

    return GameState(
        roster=state.roster,
        phase=RESOLVED,
        round_number=state.round_number,
        num_rounds=state.num_rounds,
        score=result.running_score,
        incident=state.incident,
        history=new_history
    )


def advance_round(state: GameState) -> GameState:
    """
    Move to the next round, or end the game after the last one.

    Raises:
        ValueError: If not in RESOLVED phase
    """
    if state.phase != RESOLVED:
        raise ValueError(f"Can only advance from {RESOLVED} phase, currently in {state.phase}")

    if state.round_number >= state.num_rounds:
        next_phase = ENDED
        next_round = state.round_number
    else:
        next_phase = AWAITING_INCIDENT
        next_round = state.round_number + 1

    return GameState(
        roster=state.roster,
        phase=next_phase,
        round_number=next_round,
        num_rounds=state.num_rounds,
        score=state.score,
        incident=None,
        history=state.history.copy()
    )
