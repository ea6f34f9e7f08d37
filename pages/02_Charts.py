import json
import logging
import streamlit as st

import constants
from utils.compute import route_comparison, route_names, tourism_shares
from utils.filters import route_sidebar
from utils.io import load_region_block
from utils.viz import co2_bar, distance_bar, tourism_pie

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Impact & tourisme", page_icon=":material/analytics:", layout="wide")

st.markdown("# Impact du train en Bretagne")

LOAD_ERRORS = (OSError, json.JSONDecodeError, KeyError, ValueError)

# Route comparison (CO₂ + distance)
try:
    routes_block = load_region_block(constants.DATA_DIR / constants.ROUTES_FILENAME, constants.REGION_KEY)
except LOAD_ERRORS as e:
    logger.error("Error while loading %s: %s", constants.ROUTES_FILENAME, e)
    routes_block = None

route = route_sidebar(route_names(routes_block) if routes_block else [])

if routes_block is None:
    st.warning("Données des trajets indisponibles.")
elif route is not None:
    try:
        comparison = route_comparison(routes_block, route)
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Cannot compute route %r: %s", route, e)
        st.warning(f"Trajet « {route} » : données incomplètes.")
    else:
        c1, c2 = st.columns(2, gap="large")
        with c1:
            st.plotly_chart(co2_bar(comparison), width="stretch")
        with c2:
            st.plotly_chart(distance_bar(comparison), width="stretch")

        saved = comparison["car_g"] - comparison["train_g"]
        if saved > 0:
            saved_fr = f"{saved:,}".replace(",", " ")
            st.info(f":material/eco:  Sur **{route}**, le train évite environ **{saved_fr} g de CO₂** par voyageur.")

st.divider()

# Tourism by department
try:
    tourism_block = load_region_block(constants.DATA_DIR / constants.TOURISM_FILENAME, constants.REGION_KEY)
except LOAD_ERRORS as e:
    logger.error("Error while loading %s: %s", constants.TOURISM_FILENAME, e)
    tourism_block = None

fig = tourism_pie(tourism_shares(tourism_block)) if tourism_block is not None else None
if fig is None:
    st.warning("Données de tourisme indisponibles.")
else:
    st.plotly_chart(fig, width="stretch")
