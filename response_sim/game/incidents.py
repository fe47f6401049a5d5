"""
Incident Generator for the Emergency Response Simulation

Produces one random incident per round. The random source is passed in
so a seeded generator gives reproducible incidents.
"""

import logging
import random
from dataclasses import dataclass

from response_sim import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Incident:
    """Emergency incident needing a response."""
    type: str
    location: str
    difficulty: int

    def __post_init__(self):
        if self.difficulty not in config.DIFFICULTY_LEVELS:
            raise ValueError(
                f"Invalid difficulty: {self.difficulty}. Must be one of {list(config.DIFFICULTY_LEVELS)}"
            )


def generate_incident(rng: random.Random) -> Incident:
    """
    Generate a random incident.

    Type, location and difficulty are each sampled uniformly.

    Args:
        rng: Random source (seed it for deterministic incidents)

    Returns:
        New Incident
    """
    incident = Incident(
        type=rng.choice(config.INCIDENT_TYPES),
        location=rng.choice(config.LOCATIONS),
        difficulty=rng.choice(config.DIFFICULTY_LEVELS)
    )
    logger.debug(f"Generated incident: {incident}")
    return incident


def describe_incident(incident: Incident) -> str:
    """Format the one-line incident description shown to the dispatcher."""
    return f"Incident: {incident.type} at {incident.location} (Difficulty: {incident.difficulty})"
