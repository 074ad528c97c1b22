import os
import sys
import json
import pytest

# Ensure the backend root (containing the `rankdown` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from rankdown.core.config import settings
from rankdown.api.dependencies import reset_services
from rankdown.schemas.snapshot_schemas import Round, Snapshot


SAMPLE_STATE = {
    "gameTitle": "Rankdown Test",
    "updatedAt": "2026-10-18T12:00:00Z",
    "players": ["A", "B", "C", "D", "E"],
    "currentRound": {
        "roundNumber": 3,
        "nominator": "D",
        "nominees": ["A", "B", "C"],
        "saves": {"v1": "A"},
        "elims": {"v2": "B"},
        "leftoversEliminated": [],
    },
    "eliminated": [
        {"name": "X", "round": 1, "method": "voted"},
        {"name": "Y", "round": 2, "method": "leftover"},
    ],
}


def make_round(nominees, saves=None, elims=None, leftovers=None, number=1):
    return Round(
        roundNumber=number,
        nominees=nominees,
        saves=saves or {},
        elims=elims or {},
        leftoversEliminated=leftovers or [],
    )


@pytest.fixture()
def sample_state():
    return json.loads(json.dumps(SAMPLE_STATE))


@pytest.fixture()
def sample_snapshot(sample_state):
    return Snapshot.model_validate(sample_state)


@pytest.fixture()
def state_file(tmp_path, sample_state):
    path = tmp_path / 'state.json'
    path.write_text(json.dumps(sample_state))
    return path


@pytest.fixture()
def app_settings(monkeypatch, state_file):
    """Point the global services at a temporary state file."""
    monkeypatch.setattr(settings, 'SNAPSHOT_SOURCE', str(state_file))
    monkeypatch.setattr(settings, 'KEEP_LAST_GOOD_ON_ERROR', False)
    reset_services()
    yield settings
    reset_services()


@pytest.fixture()
def client(app_settings):
    from fastapi.testclient import TestClient
    from main import app
    return TestClient(app)
