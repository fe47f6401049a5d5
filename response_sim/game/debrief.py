"""
Debrief for the Emergency Response Simulation

Round log table, summary metrics and coaching feedback shown after
the final round.
"""

from typing import Dict, List

import pandas as pd

from response_sim.game.scoring import HANDLED, MISMATCH, SKIPPED, RoundResult

ROUND_LOG_COLUMNS = [
    "round", "incident", "location", "difficulty", "unit",
    "outcome", "response_ms", "points", "score",
]


def build_round_log(history: List[RoundResult]) -> pd.DataFrame:
    """
    Tabulate resolved rounds.

    Args:
        history: RoundResult list in round order

    Returns:
        DataFrame with one row per round (columns in ROUND_LOG_COLUMNS)
    """
    rows = [
        {
            "round": result.round_number,
            "incident": result.incident.type,
            "location": result.incident.location,
            "difficulty": result.incident.difficulty,
            "unit": result.unit.name if result.unit else "-",
            "outcome": result.outcome,
            "response_ms": result.response_time_ms,
            "points": result.points_delta,
            "score": result.running_score,
        }
        for result in history
    ]
    df = pd.DataFrame(rows, columns=ROUND_LOG_COLUMNS)
    df["response_ms"] = pd.to_numeric(df["response_ms"]).astype("Int64")
    return df


def summarize_rounds(history: List[RoundResult]) -> Dict:
    """
    Aggregate the round log into debrief metrics.

    Returns:
        Dict with handled, mismatched, skipped counts, points_earned,
        penalties and final_score
    """
    df = build_round_log(history)
    if df.empty:
        return {
            "rounds": 0,
            "handled": 0,
            "mismatched": 0,
            "skipped": 0,
            "points_earned": 0,
            "penalties": 0,
            "final_score": 0,
        }

    outcome_counts = df["outcome"].value_counts()
    return {
        "rounds": len(df),
        "handled": int(outcome_counts.get(HANDLED, 0)),
        "mismatched": int(outcome_counts.get(MISMATCH, 0)),
        "skipped": int(outcome_counts.get(SKIPPED, 0)),
        "points_earned": int(df.loc[df["points"] > 0, "points"].sum()),
        "penalties": int(-df.loc[df["points"] < 0, "points"].sum()),
        "final_score": int(df["score"].iloc[-1]),
    }


def coaching_feedback(summary: Dict) -> List[str]:
    """Deterministic coaching notes for the debrief."""
    feedback = []

    if summary["rounds"] == 0:
        return feedback

    if summary["handled"] == summary["rounds"]:
        feedback.append("Strong dispatching: every incident got a capable unit.")
    elif summary["handled"] >= summary["rounds"] / 2:
        feedback.append("Solid dispatching: most incidents got a capable unit.")
    else:
        feedback.append("Most incidents went without a capable unit. Check the Can Handle column before choosing.")

    if summary["mismatched"] > 0:
        feedback.append(
            f"Mismatched units: {summary['mismatched']} round(s) cost {summary['penalties']} points in penalties."
        )

    if summary["skipped"] > 0:
        feedback.append(f"Skipped rounds: {summary['skipped']} incident(s) received no response.")

    return feedback
