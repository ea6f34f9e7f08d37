import plotly.express as px
import plotly.graph_objects as go

from constants import COLOR_LIGHT, COLOR_DARK, TOURISM_COLORS
from utils.compute import emissions_frame

FONT = "Jost, sans-serif"

def theme():
    # separators: decimal "," and thousands " " (fr-FR)
    return {"template": "plotly_white", "height": 380, "separators": ", "}

def _title(text: str) -> dict:
    return dict(text=text, font=dict(family=FONT, size=18, color="#111"))

def co2_bar(comparison: dict):
    """Train vs car emissions (g CO₂) for the chosen route."""
    cfg = theme()
    df = emissions_frame(comparison)
    fig = px.bar(
        df, x="mode", y="co2_g", color="mode",
        color_discrete_map={"Train": COLOR_LIGHT, "Voiture": COLOR_DARK},
    )
    fig.update_traces(hovertemplate="%{x} : %{y:,} g CO₂<extra></extra>")
    fig.update_layout(
        template=cfg["template"], height=cfg["height"], separators=cfg["separators"],
        title=_title("Comparaison des émissions selon le trajet choisi"),
        showlegend=False, font=dict(family=FONT, color="#111"),
    )
    fig.update_yaxes(title="g CO₂", rangemode="tozero", tickformat=",")
    fig.update_xaxes(title=None)
    return fig

def distance_bar(comparison: dict):
    cfg = theme()
    fig = go.Figure(go.Bar(
        x=[comparison["route"]],
        y=[comparison["distance_km"]],
        marker_color=COLOR_DARK,
        hovertemplate="%{x} : %{y:,} km accessibles en moyenne<extra></extra>",
    ))
    fig.update_layout(
        template=cfg["template"], height=cfg["height"], separators=cfg["separators"],
        title=_title("Distance moyenne accessible selon le trajet"),
        showlegend=False, font=dict(family=FONT, color="#111"),
    )
    fig.update_yaxes(title="Distance (km)", rangemode="tozero", tickformat=",")
    fig.update_xaxes(title=None)
    return fig

def tourism_pie(df_shares):
    """Pie of rail tourism by department. None when there is nothing to plot."""
    if df_shares is None or df_shares.empty:
        return None
    cfg = theme()
    fig = px.pie(
        df_shares, names="department", values="share",
        color_discrete_sequence=TOURISM_COLORS,
    )
    # keep the document order of departments
    fig.update_traces(sort=False)
    fig.update_layout(
        template=cfg["template"], height=cfg["height"] + 40, separators=cfg["separators"],
        title=_title("Répartition du tourisme ferroviaire par département"),
        legend=dict(orientation="h", yanchor="top", y=-0.05, xanchor="center", x=0.5),
        font=dict(family=FONT, color="#111"),
    )
    return fig
