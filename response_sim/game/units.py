"""
Unit Roster and Capability Rules for the Emergency Response Simulation

Responder units and the rules deciding which incident types each unit
category is allowed to respond to.
Pure functions - no console dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from response_sim import config


class Category(Enum):
    """Closed set of responder categories."""
    POLICE = "police"
    FIRE = "fire"
    MEDICAL = "medical"
    SEARCH_RESCUE = "search_rescue"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: Dict[Category, str] = {
    Category.POLICE: "Police",
    Category.FIRE: "Firefighter",
    Category.MEDICAL: "Ambulance",
    Category.SEARCH_RESCUE: "SearchAndRescue",
}

# Incident types each category may respond to (lowercase for matching)
CAPABILITIES: Dict[Category, FrozenSet[str]] = {
    Category.POLICE: frozenset({"crime"}),
    Category.FIRE: frozenset({"fire"}),
    Category.MEDICAL: frozenset({"medical"}),
    Category.SEARCH_RESCUE: frozenset({"search", "rescue"}),
}

NARRATION_TEMPLATES: Dict[Category, str] = {
    Category.POLICE: "{name} responding to a crime at {location}.",
    Category.FIRE: "{name} extinguishing the fire at {location}.",
    Category.MEDICAL: "{name} treating patients at {location}.",
    Category.SEARCH_RESCUE: "{name} is conducting a search and rescue at {location}.",
}


@dataclass(frozen=True)
class Unit:
    """Responder unit. Immutable after creation."""
    name: str
    category: Category
    speed: int

    def __post_init__(self):
        if not config.MIN_UNIT_SPEED <= self.speed <= config.MAX_UNIT_SPEED:
            raise ValueError(
                f"Invalid speed for {self.name}: {self.speed}. "
                f"Must be between {config.MIN_UNIT_SPEED} and {config.MAX_UNIT_SPEED}"
            )


def can_handle(category: Category, incident_type: str) -> bool:
    """
    Check whether a unit category is authorized to respond to an incident type.

    Comparison is case-insensitive; anything else must match exactly.

    Args:
        category: Responder category
        incident_type: Incident type string (e.g. "Crime", "rescue")

    Returns:
        True if the category can respond, False otherwise

    Examples:
        >>> can_handle(Category.POLICE, "CRIME")
        True
        >>> can_handle(Category.SEARCH_RESCUE, "Rescue")
        True
        >>> can_handle(Category.POLICE, "Fire")
        False
    """
    return incident_type.lower() in CAPABILITIES[category]


def unit_can_handle(unit: Unit, incident_type: str) -> bool:
    """Check whether a specific unit can respond to an incident type."""
    return can_handle(unit.category, incident_type)


def narrate_response(unit: Unit, location: str) -> str:
    """Build the narration line for a unit responding at a location."""
    return NARRATION_TEMPLATES[unit.category].format(name=unit.name, location=location)


def build_roster(spec: Optional[Sequence[Tuple[str, str, int]]] = None) -> List[Unit]:
    """
    Build the unit roster.

    Args:
        spec: Sequence of (name, category key, speed) tuples.
              Defaults to config.DEFAULT_ROSTER.

    Returns:
        List of Unit objects in roster order

    Raises:
        ValueError: If a category key is unknown or a speed is out of range
    """
    if spec is None:
        spec = config.DEFAULT_ROSTER

    roster = []
    for name, category_key, speed in spec:
        try:
            category = Category(category_key)
        except ValueError:
            valid = [c.value for c in Category]
            raise ValueError(f"Invalid category for {name}: {category_key}. Must be one of {valid}")
        roster.append(Unit(name=name, category=category, speed=speed))

    return roster


def annotate_roster(roster: Sequence[Unit], incident_type: str) -> List[Tuple[int, Unit, bool]]:
    """
    Pair each unit with its 1-based menu number and whether it can handle the incident.

    Args:
        roster: Units in menu order
        incident_type: Current incident type

    Returns:
        List of (menu_number, unit, can_handle) tuples
    """
    return [
        (index, unit, unit_can_handle(unit, incident_type))
        for index, unit in enumerate(roster, start=1)
    ]
