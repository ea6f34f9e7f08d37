import os
from pathlib import Path

# Data directory (override with GARES_DATA_DIR)
DATA_DIR = Path(os.environ.get("GARES_DATA_DIR", "data"))

# Filenames for the JSON datasets
STATIONS_FILENAME = "villes_bretagne.json"
ROUTES_FILENAME = "data_graphique.json"
TOURISM_FILENAME = "data_tourisme.json"

# Remote base URL for the datasets, empty = local files only
DATA_BASE_URL = os.environ.get("GARES_DATA_URL", "")

# Region block inside the chart datasets
REGION_KEY = "bretagne"

LOG_LEVEL = os.environ.get("GARES_LOG_LEVEL", "INFO")

# Nearest-station ranking
EARTH_RADIUS_KM = 6371.0
NEARBY_COUNT = 4

# Candidate description fields, in precedence order
DESCRIPTION_FIELDS = (
    "description", "desc", "resume", "résumé", "presentation",
    "texte", "texteCourt", "apercu", "apercu_court",
)

DEFAULT_IMPACT = "Voyager en train, c’est réduire l’empreinte carbone 🌿"

# Map defaults
MAP_CENTER = (48.2, -3.0)
MAP_ZOOM = 8
SELECTED_ZOOM = 10

# Palette
COLOR_LIGHT = "#A0AE9E"
COLOR_DARK = "#5F6A60"
MARKER_RGB = [138, 147, 134]
SELECTED_RGB = [95, 106, 96]
TOURISM_COLORS = ["#5F6A60", "#7C877C", "#A0AE9E", "#C8D1C7"]
