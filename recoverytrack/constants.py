"""
Shared constants - pain location vocabulary, score thresholds and daily messages.
"""

# Closed vocabulary of body locations a player can tag; order is display order.
PAIN_LOCATIONS = (
    "Shoulder",
    "Elbow",
    "Wrist",
    "Lower Back",
    "Hip",
    "Hamstring",
    "Knee",
    "Ankle",
    "Calf",
    "Neck",
    "Upper Back",
    "Chest",
    "Quad",
    "Groin",
)

# Lower-cased label -> canonical label
PAIN_LOCATION_LOOKUP = {location.lower(): location for location in PAIN_LOCATIONS}

HEALTH_SCORE_THRESHOLDS = {
    "green": 80,
    "yellow": 60,
    "orange": 40,
    "red": 0,
}

HEALTH_COLOR_HEX = {
    "green": "#228B22",
    "yellow": "#FFD700",
    "orange": "#FF8C00",
    "red": "#DC143C",
}

HEALTH_STATUS_TEXT = {
    "green": "Ready",
    "yellow": "Monitor",
    "orange": "Caution",
    "red": "At Risk",
}

MOTIVATIONAL_MESSAGES = (
    "Every check-in is a step toward peak performance.",
    "Your body tells a story. Listen carefully.",
    "Recovery is where champions are built.",
    "Consistency is the key to longevity.",
    "Small improvements lead to major gains.",
    "Your dedication today prevents injuries tomorrow.",
    "Knowledge is power. Track your progress.",
    "The best ability is availability.",
    "Smart recovery equals smart performance.",
    "Your future self will thank you.",
)
