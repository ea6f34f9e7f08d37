import math
import pandas as pd

def _round_half_up(x: float) -> int:
    # Same rounding as the chart labels in the browser (Math.round)
    return int(math.floor(float(x) + 0.5))

def route_names(block: dict) -> list[str]:
    """Example routes in document order."""
    return list((block.get("trajets_exemples") or {}).keys())

def route_comparison(block: dict, route: str) -> dict:
    """
    CO₂ emitted by train and by car over one example route, plus its distance.
    Returns {"route", "distance_km", "train_g", "car_g"} (integers).
    Raises KeyError for an unknown route.
    """
    distance = float(block["trajets_exemples"][route])
    factors = block["facteurs_emission"]
    return {
        "route": route,
        "distance_km": _round_half_up(distance),
        "train_g": _round_half_up(distance * float(factors["train"])),
        "car_g": _round_half_up(distance * float(factors["voiture"])),
    }

def emissions_frame(comparison: dict) -> pd.DataFrame:
    return pd.DataFrame({
        "mode": ["Train", "Voiture"],
        "co2_g": [comparison["train_g"], comparison["car_g"]],
    })

def tourism_shares(block: dict) -> pd.DataFrame:
    """Departments and their share of rail tourism, in document order."""
    shares = block.get("tourisme_ferroviaire") or {}
    if not shares:
        return pd.DataFrame(columns=["department", "share"])
    return pd.DataFrame({
        "department": list(shares.keys()),
        "share": pd.to_numeric(pd.Series(list(shares.values())), errors="coerce"),
    })
