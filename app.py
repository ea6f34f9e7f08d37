import logging
import streamlit as st

# Import project modules
from utils.state import init_state, load_stations_once
import constants

logging.basicConfig(
    level=constants.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Attempt to import download function
try:
    from download_data import download_datasets
    DOWNLOAD_ENABLED = bool(constants.DATA_BASE_URL)
except ImportError:
    logger.warning("Could not import download function, datasets must be present locally.")
    DOWNLOAD_ENABLED = False

# Page config
st.set_page_config(
    page_title="Gares de Bretagne",
    page_icon=":material/train:",
    layout="wide",
)

# Initialize Session State
init_state()

# Load stations once per session (fetching the datasets first if a remote source is configured)
load_stations_once(
    download=(lambda: download_datasets(constants.DATA_BASE_URL, constants.DATA_DIR)) if DOWNLOAD_ENABLED else None
)

# Pages navigation
pg = st.navigation([
    st.Page("pages/01_Map.py",    title="Carte des gares",     icon=":material/map:", default=True),
    st.Page("pages/02_Charts.py", title="Impact & tourisme",   icon=":material/analytics:"),
])

# Run the selected page
pg.run()
