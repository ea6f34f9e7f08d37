"""
Station records and the selection component behind the map page.

A `StationSelector` owns the station sequence loaded for the session and the
currently selected station. Every user action (dropdown confirmation, map
click, nearby card) ends up in `select`, which returns the selected station
and its nearest neighbours.
"""
import logging
import numbers
from dataclasses import dataclass
from typing import Iterable, Optional

from constants import DEFAULT_IMPACT, DESCRIPTION_FIELDS, NEARBY_COUNT
from utils.geo import haversine_km

logger = logging.getLogger(__name__)


class InvalidSelectionError(ValueError):
    """Raised when a menu index or station id does not designate a station."""


@dataclass(frozen=True)
class Station:
    id: int
    name: str
    latitude: float
    longitude: float
    image_url: Optional[str] = None
    description: str = ""
    impact_note: Optional[str] = None

    @property
    def impact_text(self) -> str:
        return self.impact_note or DEFAULT_IMPACT


@dataclass(frozen=True)
class NearbyStation:
    station: Station
    distance_km: float


@dataclass(frozen=True)
class SelectionResult:
    selected: Station
    nearest: tuple[NearbyStation, ...]


# --- Record parsing ---------------------------------------------------------
def resolve_description(record: dict) -> str:
    """First non-blank string among DESCRIPTION_FIELDS, else ''."""
    for field in DESCRIPTION_FIELDS:
        value = record.get(field)
        if isinstance(value, str) and value.strip():
            return value
    return ""

def _optional_text(value) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None

def _coordinate(record: dict, key: str, limit: float) -> float:
    raw = record[key]
    if isinstance(raw, bool):
        raise ValueError(f"{key} is not a number: {raw!r}")
    value = float(raw)
    if not -limit <= value <= limit:
        raise ValueError(f"{key} out of range: {value}")
    return value

def station_from_record(record: dict, station_id: int) -> Station:
    """
    Build a Station from a raw JSON record.

    Raises KeyError when `nom`, `lat` or `lon` is missing and ValueError when
    one of them is invalid.
    """
    if not isinstance(record, dict):
        raise ValueError(f"record is not an object: {type(record).__name__}")
    name = record["nom"]
    if not isinstance(name, str) or not name.strip():
        raise ValueError("empty station name")
    return Station(
        id=station_id,
        name=name,
        latitude=_coordinate(record, "lat", 90.0),
        longitude=_coordinate(record, "lon", 180.0),
        image_url=_optional_text(record.get("image")),
        description=resolve_description(record),
        impact_note=_optional_text(record.get("impact")),
    )

def parse_stations(records) -> tuple[list[Station], list[dict]]:
    """
    Convert the stations document into Station objects.
    Return (stations, rejected) where rejected = [{"index", "record", "reason"}].
    Ids are contiguous over accepted records, so they match menu positions.
    """
    if not isinstance(records, list):
        raise ValueError("stations document must be a JSON array")

    stations: list[Station] = []
    rejected: list[dict] = []
    for idx, record in enumerate(records):
        try:
            stations.append(station_from_record(record, len(stations)))
        except (KeyError, ValueError, TypeError) as e:
            reason = f"missing field {e}" if isinstance(e, KeyError) else str(e)
            logger.warning("Skipping station record #%d: %s", idx, reason)
            rejected.append({"index": idx, "record": record, "reason": reason})
    return stations, rejected


# --- Selection ---------------------------------------------------------------
class StationSelector:
    """
    Holds the session's stations (read-only) and the current selection.

    A new dataset needs a new instance.
    """

    def __init__(self, stations: Iterable[Station]):
        self._stations: tuple[Station, ...] = tuple(stations)
        self._selected: Optional[Station] = None
        self._last_result: Optional[SelectionResult] = None

    def __len__(self) -> int:
        return len(self._stations)

    @property
    def stations(self) -> tuple[Station, ...]:
        return self._stations

    @property
    def selected(self) -> Optional[Station]:
        return self._selected

    @property
    def last_result(self) -> Optional[SelectionResult]:
        return self._last_result

    def names(self) -> list[str]:
        return [s.name for s in self._stations]

    def get(self, station_id) -> Station:
        """Station at position `station_id`; InvalidSelectionError otherwise."""
        if isinstance(station_id, bool) or not isinstance(station_id, numbers.Integral):
            raise InvalidSelectionError(f"invalid station id: {station_id!r}")
        if not 0 <= station_id < len(self._stations):
            raise InvalidSelectionError(f"station id out of range: {station_id}")
        return self._stations[int(station_id)]

    def _index_of(self, station: Station) -> Optional[int]:
        for idx, candidate in enumerate(self._stations):
            if candidate == station:
                return idx
        return None

    def _own_index(self, station: Station) -> Optional[int]:
        # A rebuilt copy of a member (same id and name) still designates it
        idx = self._index_of(station)
        if idx is not None:
            return idx
        for idx, candidate in enumerate(self._stations):
            if candidate.id == station.id and candidate.name == station.name:
                return idx
        return None

    def nearest(self, station: Station, k: int = NEARBY_COUNT) -> tuple[NearbyStation, ...]:
        """The k closest other stations, ascending; ties keep input order."""
        own = self._own_index(station)
        ranked = [
            NearbyStation(
                station=other,
                distance_km=haversine_km(station.latitude, station.longitude,
                                         other.latitude, other.longitude),
            )
            for idx, other in enumerate(self._stations)
            if idx != own and other != station
        ]
        # sorted() is stable
        ranked = sorted(ranked, key=lambda n: n.distance_km)
        return tuple(ranked[:k])

    def select(self, station: Station) -> SelectionResult:
        if self._index_of(station) is None:
            logger.warning(
                "Selected station %r (id=%s) is not part of the loaded dataset; "
                "using its own coordinates", station.name, station.id,
            )
        result = SelectionResult(selected=station, nearest=self.nearest(station))
        self._selected = station
        self._last_result = result
        return result

    # Interaction events, all routed to select()
    def on_station_chosen(self, index) -> SelectionResult:
        return self.select(self.get(index))

    def on_map_marker_clicked(self, station_id) -> SelectionResult:
        return self.select(self.get(station_id))

    def on_nearby_card_clicked(self, station_id) -> SelectionResult:
        return self.select(self.get(station_id))


def build_selector(records) -> tuple[StationSelector, list[dict]]:
    stations, rejected = parse_stations(records)
    logger.info("Loaded %d stations (%d rejected)", len(stations), len(rejected))
    return StationSelector(stations), rejected
