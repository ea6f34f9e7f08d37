import json
import requests
import logging
import streamlit as st

import constants
from utils.geo import clicked_station_id
from utils.io import load_json
from utils.quality import duplicate_station_names
from utils.stations import InvalidSelectionError, build_selector

logger = logging.getLogger(__name__)

LOAD_ERROR = "Impossible de charger les données des villes. Vérifie data/villes_bretagne.json"

def init_state():
    defaults = {
        # Station dropdown (position in the dataset)
        "station_choice": None,

        # Bumped after each handled map click so the chart selection starts empty
        "map_generation": 0,

        # Example route for the charts page
        "route": None,
    }
    for k, v in defaults.items():
        st.session_state.setdefault(k, v)

def load_stations_once(download=None):
    """
    Build the session's StationSelector from the stations file.
    On failure, show the load error once and flag the session.
    `download` is called first when the file is missing.
    """
    if "selector" in st.session_state or st.session_state.get("stations_load_failed"):
        return

    path = constants.DATA_DIR / constants.STATIONS_FILENAME
    if not path.exists() and download is not None:
        try:
            with st.spinner("Téléchargement des données..."):
                download()
        except (requests.exceptions.RequestException, OSError, ValueError) as download_error:
            logger.error("Dataset download failed: %s", download_error)

    try:
        selector, rejected = build_selector(load_json(path))
    except (OSError, json.JSONDecodeError, ValueError) as load_error:
        logger.error("Error while loading %s: %s", path, load_error)
        st.session_state["stations_load_failed"] = True
        st.error(LOAD_ERROR)
        return

    st.session_state.selector = selector
    st.session_state.rejected_records = rejected
    st.session_state.duplicate_names = duplicate_station_names(selector.stations)

def consume_map_click(selector, event, session) -> bool:
    """
    Route a pydeck selection event to the selector.
    Returns True when a click was consumed; the caller must then remount the
    chart (new key from session["map_generation"]) so the next click, even on
    the same marker, is a fresh selection.
    """
    clicked = clicked_station_id(event)
    if clicked is None:
        return False
    try:
        selector.on_map_marker_clicked(clicked)
    except InvalidSelectionError as e:
        logger.warning("Ignoring map click: %s", e)
    session["map_generation"] = session.get("map_generation", 0) + 1
    return True
