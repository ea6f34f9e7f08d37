import streamlit as st

from constants import NEARBY_COUNT
from utils.filters import station_sidebar
from utils.geo import build_station_deck
from utils.quality import rejected_table
from utils.state import consume_map_click

st.set_page_config(page_title="Carte des gares", page_icon=":material/map:", layout="wide")

st.markdown("# Gares de Bretagne")
st.caption("Cliquez sur une gare de la carte ou choisissez-la dans le menu pour afficher les gares les plus proches.")

selector = st.session_state.get("selector")
if selector is None or len(selector) == 0:
    st.sidebar.info("Aucune gare chargée.")
    st.info("Aucune donnée de gare disponible : la carte et la liste des gares proches restent vides.")
    st.stop()

# Sidebar menu (dropdown + "Valider")
station_sidebar(selector)

# Data-quality notes
dups = st.session_state.get("duplicate_names", [])
rejected = st.session_state.get("rejected_records", [])
if dups or rejected:
    with st.expander("Qualité des données"):
        if dups:
            st.warning("Noms de gare en double : " + ", ".join(dups))
        if rejected:
            st.write(f"{len(rejected)} enregistrement(s) ignoré(s) :")
            st.dataframe(rejected_table(rejected), width="stretch", hide_index=True)

col_map, col_panel = st.columns((1.6, 1), gap="large")

# Map
with col_map:
    event = st.pydeck_chart(
        build_station_deck(selector.stations, selector.selected),
        width="stretch",
        height=560,
        on_select="rerun",
        selection_mode="single-object",
        key=f"station_map_{st.session_state.get('map_generation', 0)}",
    )

    # A fresh key after each click: re-clicking the same marker is a new selection
    if consume_map_click(selector, event, st.session_state):
        st.rerun()

# Description panel
with col_panel:
    sel = selector.selected
    if sel is None:
        st.info("Sélectionnez une gare pour afficher sa présentation.")
    else:
        st.subheader(f"Gare de la Ville de {sel.name}")
        if sel.image_url:
            st.image(sel.image_url, caption=f"Photo de {sel.name}", width="stretch")
        if sel.description:
            st.markdown(sel.description)
        st.success(sel.impact_text, icon=":material/eco:")

# Nearby stations
result = selector.last_result
if result is not None:
    st.subheader("Gares à proximité")
    if not result.nearest:
        st.caption("Aucune autre gare dans le jeu de données.")
    else:
        cols = st.columns(NEARBY_COUNT)
        for col, nb in zip(cols, result.nearest):
            with col, st.container(border=True):
                if nb.station.image_url:
                    st.image(nb.station.image_url, width="stretch")
                st.markdown(f"**{nb.station.name}**")
                st.caption(f"{nb.distance_km:.1f} km")
                if st.button("Voir", key=f"nearby_{nb.station.id}", width="stretch"):
                    selector.on_nearby_card_clicked(nb.station.id)
                    st.rerun()
