import logging
import requests
from pathlib import Path

import constants

logger = logging.getLogger(__name__)

DATASETS = (
    constants.STATIONS_FILENAME,
    constants.ROUTES_FILENAME,
    constants.TOURISM_FILENAME,
)

def download_and_save(url: str, output_path: Path):
    """Downloads a JSON document from a URL and saves it to a file."""
    logger.info("Downloading %s", url)

    # Ensure the data directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    response = requests.get(url, timeout=30)
    response.raise_for_status()  # Check for HTTP errors

    with open(output_path, "wb") as f:
        f.write(response.content)

    logger.info("Saved %s", output_path.resolve())

def download_datasets(base_url: str, data_dir: Path) -> list[Path]:
    """Fetch every dataset missing from data_dir. Return the paths written."""
    if not base_url:
        raise ValueError("No base URL configured for the datasets (GARES_DATA_URL)")
    written = []
    for name in DATASETS:
        target = data_dir / name
        if target.exists():
            continue
        download_and_save(f"{base_url.rstrip('/')}/{name}", target)
        written.append(target)
    return written

if __name__ == "__main__":
    logging.basicConfig(level=constants.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    try:
        download_datasets(constants.DATA_BASE_URL, constants.DATA_DIR)
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error("Download failed: %s", e)
        raise SystemExit(1)
