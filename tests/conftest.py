"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`dipgame` package without requiring an editable install in CI.
"""

import sys
from pathlib import Path

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import pytest  # noqa: E402

from dipgame.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; tests that patch the environment need a clean read."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def channel_map_payload() -> dict:
    """Small two-country map document in wire (camelCase) form."""

    return {
        "name": "Channel",
        "image": "channel.svg",
        "date": 1901,
        "victory": 2,
        "provinces": [
            {"id": "lon", "name": "London", "x": 0.3, "y": 0.3, "supplyCenter": True, "unit": 1},
            {"id": "wal", "name": "Wales", "x": 0.2, "y": 0.35},
            {"id": "ech", "name": "English Channel", "x": 0.3, "y": 0.45, "water": True},
            {"id": "bel", "name": "Belgium", "x": 0.5, "y": 0.4, "supplyCenter": True},
            {"id": "pic", "name": "Picardy", "x": 0.45, "y": 0.5},
            {"id": "par", "name": "Paris", "x": 0.45, "y": 0.6, "supplyCenter": True, "unit": 0},
        ],
        "routes": [
            {"p0": "lon", "p1": "wal"},
            {"p0": "lon", "p1": "ech", "water": True},
            {"p0": "wal", "p1": "ech", "water": True},
            {"p0": "ech", "p1": "bel", "water": True},
            {"p0": "ech", "p1": "pic", "water": True},
            {"p0": "bel", "p1": "pic"},
            {"p0": "pic", "p1": "par"},
        ],
        "countries": [
            {"id": "eng", "name": "England", "color": "#2a45b8", "supplyCenters": ["lon"]},
            {"id": "fra", "name": "France", "color": "#4cb4e2", "supplyCenters": ["par"]},
        ],
        "playerConfigurations": {
            "2": {},
            "1": {"eliminate": ["fra"], "neutralUnits": True},
        },
    }


@pytest.fixture
def channel_game_payload() -> dict:
    """Snapshot of a game on the channel map during its first order phase."""

    return {
        "id": 1,
        "name": "Friday game",
        "map": "channel/channel.dipmap",
        "users": ["ann", "bob"],
        "players": {"eng": "ann", "fra": "bob"},
        "history": [
            {
                "date": 1901,
                "season": 0,
                "phase": 0,
                "nations": {
                    "eng": {"supplyCenters": ["lon"], "units": [{"province": "lon", "type": 1}]},
                    "fra": {"supplyCenters": ["par"], "units": [{"province": "par", "type": 0}]},
                },
                "orders": {
                    "eng": {
                        "lon": {
                            "kind": 1,
                            "unit": "lon",
                            "result": 0,
                            "dest": "ech",
                            "coast": "",
                            "isConvoy": False,
                        }
                    },
                    "fra": {},
                },
            }
        ],
    }
