import json
from pathlib import Path

import pytest

DATA = Path(__file__).parent / "data"


@pytest.fixture
def payload():
    # local fixture so tests never hit the network
    return json.loads((DATA / "example_city.json").read_text(encoding="utf-8"))


@pytest.fixture
def moscow_minimal():
    # the smallest document the parser accepts: one day, no hours
    return {
        "location": {"name": "Moscow"},
        "current": {
            "last_updated": "2024-01-01 12:00",
            "temp_c": "5",
            "condition": {"text": "Clear", "icon": "//x/icon.png"},
        },
        "forecast": {
            "forecastday": [
                {
                    "date": "2024-01-01",
                    "day": {"maxtemp_c": "6", "mintemp_c": "2", "condition": {"text": "Clear", "icon": "//x/icon.png"}},
                    "hour": [],
                }
            ]
        },
    }
