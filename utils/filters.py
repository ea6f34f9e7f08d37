import logging
import streamlit as st

from utils.stations import InvalidSelectionError

logger = logging.getLogger(__name__)

def _stateful_select_station(label: str, selector):
    options = list(range(len(selector)))
    names = selector.names()

    current = st.session_state.get("station_choice")
    if current not in options:
        st.session_state["station_choice"] = None

    st.sidebar.selectbox(
        label,
        options=options,
        format_func=lambda i: names[i],
        key="station_choice",
        placeholder="— Sélectionner —",
    )

def station_sidebar(selector):
    """
    Station dropdown + "Valider" button.
    Returns the SelectionResult when the button selected a station, else None.
    """
    st.sidebar.header("Choisir une gare")
    _stateful_select_station("Gare", selector)

    if not st.sidebar.button("Valider", type="primary", width="stretch"):
        return None
    try:
        return selector.on_station_chosen(st.session_state.get("station_choice"))
    except InvalidSelectionError as e:
        logger.info("Rejected dropdown choice: %s", e)
        st.sidebar.error("Veuillez choisir une gare valide.")
        return None

def route_sidebar(routes: list[str]):
    st.sidebar.header("Trajet")
    if not routes:
        st.sidebar.info("Aucun trajet disponible.")
        return None

    current = st.session_state.get("route")
    if current not in routes:
        st.session_state["route"] = routes[0]

    st.sidebar.selectbox(
        "Trajet d'exemple",
        options=routes,
        key="route",
    )
    return st.session_state["route"]
