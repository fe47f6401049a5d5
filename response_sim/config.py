"""
Configuration for the emergency response simulation.
"""

# Game Loop
NUM_ROUNDS = 5
SKIP_CHOICE = 0  # Entering 0 at the prompt skips the round

# Scoring
POINTS_PER_DIFFICULTY = 10
SPEED_BONUS_DIVISOR = 10
RESPONSE_TIME_PENALTY_MS = 200  # One point lost per full step of elapsed time
MISMATCH_PENALTY = 5  # Flat deduction when the unit cannot handle the incident

# Incidents
DIFFICULTY_LEVELS = (1, 2, 3)
INCIDENT_TYPES = ("Crime", "Fire", "Medical", "Search", "Rescue")
LOCATIONS = (
    "Downtown",
    "Residential Area",
    "Industrial Zone",
    "Mountain Area",
    "Lake",
)

# Units
MIN_UNIT_SPEED = 1
MAX_UNIT_SPEED = 100

# Default roster: (name, category key, speed)
DEFAULT_ROSTER = [
    ("Police Unit 1", "police", 80),
    ("Police Unit 2", "police", 75),
    ("Firefighter Unit 1", "fire", 60),
    ("Firefighter Unit 2", "fire", 65),
    ("Ambulance Unit 1", "medical", 90),
    ("Ambulance Unit 2", "medical", 85),
    ("SAR Unit 1", "search_rescue", 70),
]

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_LEVEL = "WARNING"
