"""Tests for station parsing and the selection component."""

import dataclasses
import logging

import pytest

from constants import DEFAULT_IMPACT, NEARBY_COUNT
from utils.stations import (
    InvalidSelectionError,
    Station,
    StationSelector,
    build_selector,
    parse_stations,
    resolve_description,
    station_from_record,
)


class TestResolveDescription:
    def test_description_wins(self):
        record = {"description": "main", "desc": "short"}
        assert resolve_description(record) == "main"

    def test_desc_before_resume(self):
        record = {"desc": "from desc", "resume": "from resume"}
        assert resolve_description(record) == "from desc"

    def test_accented_field(self):
        assert resolve_description({"résumé": "accentué"}) == "accentué"

    def test_last_candidate(self):
        assert resolve_description({"apercu_court": "bref"}) == "bref"

    def test_blank_values_are_skipped(self):
        record = {"description": "   ", "desc": "", "texte": "kept"}
        assert resolve_description(record) == "kept"

    def test_non_string_values_are_skipped(self):
        record = {"description": 42, "desc": None, "presentation": "ok"}
        assert resolve_description(record) == "ok"

    def test_fallback_is_empty_string(self):
        record = {"description": "", "desc": "  ", "nom": "Rennes"}
        assert resolve_description(record) == ""
        assert resolve_description({}) == ""


class TestParsing:
    def test_station_from_record(self):
        station = station_from_record(
            {"nom": "Vannes", "lat": "47.66", "lon": -2.76, "image": "img/vannes.jpg", "desc": "Golfe"},
            station_id=3,
        )
        assert station.id == 3
        assert station.name == "Vannes"
        assert station.latitude == pytest.approx(47.66)
        assert station.image_url == "img/vannes.jpg"
        assert station.description == "Golfe"
        assert station.impact_note is None

    def test_impact_fallback(self):
        station = station_from_record({"nom": "Brest", "lat": 48.39, "lon": -4.49}, 0)
        assert station.impact_text == DEFAULT_IMPACT

    def test_impact_kept(self):
        station = station_from_record({"nom": "Brest", "lat": 48.39, "lon": -4.49, "impact": "Moins de CO₂"}, 0)
        assert station.impact_text == "Moins de CO₂"

    def test_malformed_records_are_skipped(self, caplog):
        records = [
            {"nom": "Rennes", "lat": 48.11, "lon": -1.68},
            {"nom": "Nowhere", "lat": 48.0},
            {"nom": "Pole", "lat": 95.0, "lon": 0.0},
            {"nom": "", "lat": 48.0, "lon": -2.0},
            "not an object",
            {"nom": "Brest", "lat": 48.39, "lon": -4.49},
        ]
        with caplog.at_level(logging.WARNING):
            stations, rejected = parse_stations(records)

        assert [s.name for s in stations] == ["Rennes", "Brest"]
        assert [s.id for s in stations] == [0, 1]
        assert [r["index"] for r in rejected] == [1, 2, 3, 4]
        assert "Skipping station record" in caplog.text

    def test_document_must_be_a_list(self):
        with pytest.raises(ValueError):
            parse_stations({"nom": "Rennes"})

    def test_build_selector(self, brittany_records):
        selector, rejected = build_selector(brittany_records)
        assert len(selector) == 3
        assert rejected == []
        assert selector.names() == ["Rennes", "Brest", "Vannes"]
        assert selector.selected is None


class TestSelect:
    def test_rennes_example(self, selector, stations):
        rennes, brest, vannes = stations
        result = selector.select(rennes)

        assert result.selected == rennes
        assert [n.station.name for n in result.nearest] == ["Vannes", "Brest"]
        assert 80 < result.nearest[0].distance_km < 120
        assert 190 < result.nearest[1].distance_km < 230
        assert selector.selected == rennes
        assert selector.last_result == result

    def test_nearest_is_sorted_and_excludes_selected(self, larger_selector):
        for station in larger_selector.stations:
            result = larger_selector.select(station)
            distances = [n.distance_km for n in result.nearest]
            assert distances == sorted(distances)
            assert station not in [n.station for n in result.nearest]
            assert len(result.nearest) == min(NEARBY_COUNT, len(larger_selector) - 1)

    def test_short_dataset_length(self, selector, stations):
        assert len(selector.select(stations[1]).nearest) == 2

    def test_single_station_yields_empty_list(self):
        only = Station(id=0, name="Rennes", latitude=48.11, longitude=-1.68)
        result = StationSelector([only]).select(only)
        assert result.nearest == ()
        assert result.selected == only

    def test_ties_keep_input_order(self):
        origin = Station(id=0, name="Origin", latitude=0.0, longitude=0.0)
        east = Station(id=1, name="East", latitude=0.0, longitude=1.0)
        far = Station(id=2, name="Far", latitude=5.0, longitude=5.0)
        west = Station(id=3, name="West", latitude=0.0, longitude=-1.0)
        selector = StationSelector([origin, east, far, west])

        names = [n.station.name for n in selector.select(origin).nearest]
        assert names == ["East", "West", "Far"]

        swapped = StationSelector([origin, west, far, east])
        names = [n.station.name for n in swapped.select(origin).nearest]
        assert names == ["West", "East", "Far"]

    def test_colocated_stations_tie(self):
        a = Station(id=0, name="A", latitude=48.0, longitude=-2.0)
        b = Station(id=1, name="B", latitude=48.5, longitude=-2.5)
        c = Station(id=2, name="C", latitude=48.5, longitude=-2.5)
        result = StationSelector([a, c, b]).select(a)
        assert [n.station.name for n in result.nearest] == ["C", "B"]

    def test_select_twice_is_idempotent(self, larger_selector):
        station = larger_selector.stations[2]
        first = larger_selector.select(station)
        second = larger_selector.select(station)
        assert first.nearest == second.nearest

    def test_unknown_station_is_tolerated(self, selector, caplog):
        outsider = Station(id=99, name="Fougères", latitude=48.35, longitude=-1.20)
        with caplog.at_level(logging.WARNING):
            result = selector.select(outsider)

        assert "not part of the loaded dataset" in caplog.text
        assert result.selected == outsider
        assert len(result.nearest) == 3
        assert result.nearest[0].station.name == "Rennes"
        assert selector.selected == outsider

    def test_rebuilt_copy_is_not_its_own_neighbour(self, caplog):
        rennes = Station(id=0, name="Rennes", latitude=48.11, longitude=-1.68, description="Capitale")
        vannes = Station(id=1, name="Vannes", latitude=47.66, longitude=-2.76)
        selector = StationSelector([rennes, vannes])
        rebuilt = dataclasses.replace(rennes, description="")

        with caplog.at_level(logging.WARNING):
            result = selector.select(rebuilt)

        assert "not part of the loaded dataset" in caplog.text
        assert [n.station.name for n in result.nearest] == ["Vannes"]
        assert result.nearest[0].distance_km > 0

    def test_duplicate_names_are_distinct_stations(self):
        a = Station(id=0, name="Saint-Gildas", latitude=47.5, longitude=-2.0)
        b = Station(id=1, name="Saint-Gildas", latitude=48.5, longitude=-3.0)
        result = StationSelector([a, b]).select(a)
        assert [n.station for n in result.nearest] == [b]


class TestInteractionEvents:
    def test_station_chosen(self, selector):
        result = selector.on_station_chosen(2)
        assert result.selected.name == "Vannes"
        assert selector.selected.name == "Vannes"

    @pytest.mark.parametrize("index", [None, -1, 3, "1", True, 1.0])
    def test_invalid_choice_keeps_state(self, selector, index):
        selector.on_station_chosen(0)
        with pytest.raises(InvalidSelectionError):
            selector.on_station_chosen(index)
        assert selector.selected.name == "Rennes"

    def test_invalid_selection_is_a_value_error(self, selector):
        with pytest.raises(ValueError):
            selector.on_map_marker_clicked(42)

    def test_map_marker_clicked(self, selector):
        assert selector.on_map_marker_clicked(1).selected.name == "Brest"

    def test_nearby_card_clicked(self, selector):
        first = selector.on_station_chosen(0)
        target = first.nearest[0].station
        result = selector.on_nearby_card_clicked(target.id)
        assert result.selected == target
        assert "Rennes" in [n.station.name for n in result.nearest]
