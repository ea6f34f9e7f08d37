"""Shared fixtures."""

import pytest

from utils.stations import StationSelector, parse_stations


@pytest.fixture
def brittany_records():
    return [
        {"nom": "Rennes", "lat": 48.11, "lon": -1.68},
        {"nom": "Brest", "lat": 48.39, "lon": -4.49},
        {"nom": "Vannes", "lat": 47.66, "lon": -2.76},
    ]


@pytest.fixture
def stations(brittany_records):
    parsed, rejected = parse_stations(brittany_records)
    assert not rejected
    return parsed


@pytest.fixture
def selector(stations):
    return StationSelector(stations)


@pytest.fixture
def larger_selector():
    records = [
        {"nom": "Rennes", "lat": 48.1035, "lon": -1.6722},
        {"nom": "Brest", "lat": 48.3881, "lon": -4.4790},
        {"nom": "Quimper", "lat": 47.9946, "lon": -4.0927},
        {"nom": "Vannes", "lat": 47.6652, "lon": -2.7519},
        {"nom": "Lorient", "lat": 47.7553, "lon": -3.3659},
        {"nom": "Saint-Malo", "lat": 48.6470, "lon": -2.0045},
        {"nom": "Vitré", "lat": 48.1225, "lon": -1.2075},
    ]
    parsed, _ = parse_stations(records)
    return StationSelector(parsed)
