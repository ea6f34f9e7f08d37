import logging
import pandas as pd

logger = logging.getLogger(__name__)

def duplicate_station_names(stations) -> list[str]:
    """Names carried by more than one station, each listed once (first-seen order)."""
    if not stations:
        return []
    names = pd.Series([s.name for s in stations])
    counts = names.value_counts(sort=False)
    dups = [n for n in names.drop_duplicates() if counts[n] > 1]
    if dups:
        logger.warning("Duplicate station names in dataset: %s", ", ".join(dups))
    return dups

def rejected_table(rejected: list[dict]) -> pd.DataFrame:
    if not rejected:
        return pd.DataFrame(columns=["record", "name", "reason"])
    rows = []
    for r in rejected:
        rec = r.get("record")
        name = rec.get("nom") if isinstance(rec, dict) else None
        rows.append({"record": int(r["index"]), "name": name if isinstance(name, str) else "—", "reason": r["reason"]})
    return pd.DataFrame(rows, columns=["record", "name", "reason"])
