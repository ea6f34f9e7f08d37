import pandas as pd
import numpy as np
import pydeck as pdk
from math import radians, sin, cos, asin, sqrt

from constants import (
    EARTH_RADIUS_KM,
    MAP_CENTER,
    MAP_ZOOM,
    SELECTED_ZOOM,
    MARKER_RGB,
    SELECTED_RGB,
)

STATION_LAYER_ID = "stations"
LABEL_LAYER_ID = "station-label"

# --- Distance ---------------------------------------------------------------
def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km (haversine, R = 6371 km)."""
    φ1 = radians(lat1)
    φ2 = radians(lat2)
    Δφ = radians(lat2 - lat1)
    Δλ = radians(lon2 - lon1)
    a = sin(Δφ / 2.0) ** 2 + cos(φ1) * cos(φ2) * sin(Δλ / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_KM * asin(sqrt(a))

# --- Map layers -------------------------------------------------------------
def station_points(stations, selected_id: int | None = None) -> pd.DataFrame:
    """
    One row per station for the ScatterplotLayer.
    Columns: [station_id, name, lat, lon, radius, fill_color]
    The selected station gets a larger radius and the darker fill.
    """
    cols = ["station_id", "name", "lat", "lon", "radius", "fill_color"]
    if not stations:
        return pd.DataFrame(columns=cols)

    df = pd.DataFrame({
        "station_id": [s.id for s in stations],
        "name": [s.name for s in stations],
        "lat": [float(s.latitude) for s in stations],
        "lon": [float(s.longitude) for s in stations],
    })
    is_sel = (df["station_id"] == selected_id).to_numpy() if selected_id is not None else np.zeros(len(df), dtype=bool)
    df["radius"] = np.where(is_sel, 10, 7)
    df["fill_color"] = [SELECTED_RGB + [255] if s else MARKER_RGB + [242] for s in is_sel]
    return df[cols]

def view_state(selected=None) -> pdk.ViewState:
    if selected is None:
        return pdk.ViewState(latitude=MAP_CENTER[0], longitude=MAP_CENTER[1], zoom=MAP_ZOOM, pitch=0)
    return pdk.ViewState(
        latitude=float(selected.latitude),
        longitude=float(selected.longitude),
        zoom=SELECTED_ZOOM,
        pitch=0,
    )

def _label_layer(selected) -> pdk.Layer:
    # Single-row layer: only the selected station carries a label
    rows = [] if selected is None else [
        {"name": selected.name, "lat": float(selected.latitude), "lon": float(selected.longitude)}
    ]
    return pdk.Layer(
        "TextLayer",
        data=pd.DataFrame(rows, columns=["name", "lat", "lon"]),
        get_position=["lon", "lat"],
        get_text="name",
        get_size=14,
        get_color=[17, 17, 17, 255],
        get_pixel_offset=[0, -18],
        background=True,
        get_background_color=[255, 255, 255, 230],
        pickable=False,
        id=LABEL_LAYER_ID,
    )

def build_station_deck(stations, selected=None) -> pdk.Deck:
    points = station_points(stations, None if selected is None else selected.id)

    scatter = pdk.Layer(
        "ScatterplotLayer",
        data=points,
        get_position=["lon", "lat"],
        get_radius="radius",
        radius_units="pixels",
        get_fill_color="fill_color",
        stroked=True,
        get_line_color=[255, 255, 255, 255],
        line_width_min_pixels=2,
        pickable=True,
        auto_highlight=True,
        id=STATION_LAYER_ID,
    )

    tooltip = {
        "html": "<b>{name}</b>",
        "style": {"backgroundColor": "white", "color": "black"},
    }

    return pdk.Deck(
        map_provider="carto",
        map_style="light",
        initial_view_state=view_state(selected),
        layers=[scatter, _label_layer(selected)],
        tooltip=tooltip,
    )

def clicked_station_id(event) -> int | None:
    """
    Station id picked in a st.pydeck_chart selection event, or None.
    Expected shape: event.selection["objects"]["stations"] = [{"station_id": ..., ...}]
    """
    selection = getattr(event, "selection", None) if event is not None else None
    if not selection:
        return None
    objects = (selection.get("objects") or {}).get(STATION_LAYER_ID) or []
    if not objects:
        return None
    raw = objects[0].get("station_id")
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
