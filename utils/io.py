import json
import logging
import streamlit as st
from pathlib import Path

logger = logging.getLogger(__name__)

@st.cache_data(show_spinner=False)
def load_json(path: str | Path):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path.resolve()}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    logger.debug("Loaded %s", path)
    return data

def load_region_block(path: str | Path, region: str) -> dict:
    """Return data[region] from a chart dataset. KeyError/ValueError on bad shape."""
    data = load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{Path(path).name}: expected a JSON object")
    block = data[region]
    if not isinstance(block, dict):
        raise ValueError(f"{Path(path).name}: '{region}' must be an object")
    return block
