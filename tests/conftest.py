"""
Shared test fixtures and configuration.
"""

import os

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/recoverytrack_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from recoverytrack.models import PlayerLog  # noqa: E402
from recoverytrack.storage.local_storage import LocalStorage  # noqa: E402
from recoverytrack.storage.record_store import RecordStore  # noqa: E402


@pytest.fixture
def plan_json():
    """A well-formed model answer, fenced the way Gemini usually returns it."""
    return """```json
{
  "mobilityPlan": {
    "exercises": [
      {"name": "Foam roll quads", "duration": "10 minutes", "intensity": "Low", "equipment": "Foam roller"},
      {"name": "Hip flexor stretch", "duration": "5 minutes", "intensity": "Low"}
    ]
  },
  "nutritionRestPlan": {
    "hydration": "Drink 3 liters of water through the day",
    "nutrition": ["Lean protein with every meal", "Tart cherry juice after practice"],
    "rest": "Aim for 8-9 hours of sleep"
  }
}
```"""


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(base_dir=str(tmp_path))


@pytest.fixture
def record_store(storage):
    return RecordStore(storage)


@pytest.fixture
def make_log():
    """Factory for PlayerLog records."""
    counter = {"n": 0}

    def _make_log(
        submitted_at,
        pain_location_tags=None,
        pain_severity_level=3,
        energy_level=7,
        soreness_level=3,
        health_score=75,
        player_id="player-1",
    ):
        counter["n"] += 1
        return PlayerLog(
            id=f"log-{counter['n']}",
            player_id=player_id,
            reflection_text="Felt fine after batting practice",
            pain_location_tags=pain_location_tags or [],
            pain_severity_level=pain_severity_level,
            energy_level=energy_level,
            soreness_level=soreness_level,
            submitted_at=submitted_at,
            health_score=health_score,
        )

    return _make_log
