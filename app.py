"""
Address Livability Analyzer
===========================

Enter an address, view walking/driving scores, urban index and nearby amenities
"""

import logging
from typing import Dict, List

import streamlit as st
import pandas as pd
from streamlit_folium import st_folium
import plotly.express as px

from categories import get_category_icon
from config import (
    DEFAULT_CENTER, MAX_PLACES_PER_CATEGORY,
    LOG_LEVEL, LOG_FORMAT
)
from data_gather import AddressNotFoundError, LocationDataError, LocationDataGatherer
from generate_synthetic_data import generate_synthetic_places
from map_view import build_map
from models import Coordinates, LocationData, Place
from scoring import build_profile
from utils import clip_value

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Page config
st.set_page_config(
    page_title="Address Livability Analyzer",
    page_icon="📍",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #4f46e5;
        text-align: center;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #666;
        text-align: center;
        margin-bottom: 1.5rem;
    }
</style>
""", unsafe_allow_html=True)


def places_dataframe(categories: Dict[str, List[Place]]) -> pd.DataFrame:
    """Flat table of all places with their category."""
    rows = []
    for category, places in categories.items():
        for place in places:
            rows.append({
                'category': category,
                'name': place.display_name,
                'amenity': place.amenity,
                'shop': place.shop,
                'leisure': place.leisure,
                'address': place.street_address,
                'lat': place.lat,
                'lon': place.lon,
                'osm_type': place.type,
                'osm_id': place.id
            })
    return pd.DataFrame(rows)


def load_location(address: str, demo_mode: bool) -> LocationData:
    """Fetch location data from OSM, or build a synthetic set in demo mode."""
    if demo_mode:
        center = Coordinates(*DEFAULT_CENTER)
        return LocationData(coordinates=center, geocode=[], places=generate_synthetic_places(center))

    return LocationDataGatherer().gather(address)


# Header
st.markdown('<div class="main-header">📍 Address Livability Analyzer</div>', unsafe_allow_html=True)
st.markdown('<div class="sub-header">Walkability, drivability and nearby amenities for any address</div>', unsafe_allow_html=True)

# Search form
with st.form("search_form"):
    col_input, col_demo, col_submit = st.columns([4, 1, 1])
    with col_input:
        address = st.text_input(
            "Address",
            placeholder="Enter street address (e.g., 123 Main St, New York, NY)",
            label_visibility="collapsed"
        )
    with col_demo:
        demo_mode = st.checkbox("Demo data", help="Use synthetic places instead of live OSM data")
    with col_submit:
        submitted = st.form_submit_button("🔍 Analyze", use_container_width=True, type="primary")

if submitted:
    if not address.strip() and not demo_mode:
        st.warning("⚠️ Please provide an address to analyze")
    else:
        st.session_state.address = address.strip()
        st.session_state.demo_mode = demo_mode
        st.session_state.location = None

if not st.session_state.get('address') and not st.session_state.get('demo_mode'):
    st.info("Enter an address above to see its livability profile.")
    st.stop()

# ==================== FETCH ====================
if st.session_state.get('location') is None:
    with st.spinner("Analyzing location... Finding nearby amenities and calculating scores"):
        try:
            st.session_state.location = load_location(
                st.session_state.address, st.session_state.demo_mode
            )
        except AddressNotFoundError:
            st.error("❌ Address not found")
            st.stop()
        except (LocationDataError, ValueError) as e:
            logger.error(f"Lookup failed: {e}")
            st.error("❌ Failed to fetch location data")
            if st.button("🔄 Retry"):
                st.rerun()
            st.stop()

location: LocationData = st.session_state.location
profile = build_profile(location.coordinates, location.places)
center = location.coordinates

# ==================== HEADER ====================
st.subheader(f"📍 {location.display_name or st.session_state.address or 'Demo location'}")
st.caption(f"Found {profile.total_places} nearby places")

st.divider()

# ==================== SCORES ====================
col1, col2, col3 = st.columns(3)
with col1:
    st.metric("🚶 Walking Score", f"{profile.walking_score} / 100")
    st.progress(profile.walking_score / 100)
    st.caption("Based on walkable amenities within 1 mile")
with col2:
    st.metric("🚗 Driving Score", f"{profile.driving_score} / 100")
    st.progress(profile.driving_score / 100)
    st.caption("Based on car-accessible amenities within 10 miles")
with col3:
    urban = profile.urban_index
    st.metric(f"🏙️ Urban Index · {urban.type.value}", f"{urban.score:.1f}")
    st.progress(clip_value(urban.score / 100, 0.0, 1.0))
    st.caption(urban.description)

# ==================== MAP + STATISTICS ====================
col_map, col_stats = st.columns([2, 1])

with col_map:
    st.markdown("### 🗺️ Interactive Map")
    st_folium(build_map(center, location.places), width=None, height=450, returned_objects=[])

with col_stats:
    st.markdown("### 📊 Area Statistics")
    st.metric("Total Places", profile.total_places)
    st.metric("Categories", profile.active_categories)
    st.markdown("**Precise Coordinates**")
    st.code(f"Latitude:  {center.lat:.6f}\nLongitude: {center.lon:.6f}")

# ==================== AMENITIES ====================
st.markdown("### 🏢 Nearby Amenities")

tab1, tab2, tab3 = st.tabs(["📋 By Category", "📈 Distribution", "🗃️ Data Table"])

with tab1:
    non_empty = [(name, places) for name, places in profile.categories.items() if places]
    if not non_empty:
        st.info("No amenities found near this location.")

    grid = st.columns(3)
    for idx, (category, places) in enumerate(non_empty):
        with grid[idx % 3]:
            with st.container(border=True):
                st.markdown(f"**{get_category_icon(category)} {category}** · {len(places)}")
                for place in places[:MAX_PLACES_PER_CATEGORY]:
                    street = f" · {place.tag('addr_street')}" if place.tag('addr_street') else ""
                    st.markdown(f"- {place.display_name}{street}")
                if len(places) > MAX_PLACES_PER_CATEGORY:
                    st.caption(f"+{len(places) - MAX_PLACES_PER_CATEGORY} more")

with tab2:
    counts = pd.DataFrame(
        [
            {'category': f"{get_category_icon(name)} {name}", 'places': count}
            for name, count in profile.get_category_counts().items()
        ]
    )
    fig = px.bar(
        counts,
        x='category',
        y='places',
        title='Places by Category',
        color='places',
        color_continuous_scale='viridis'
    )
    fig.update_layout(xaxis_tickangle=-45)
    st.plotly_chart(fig, use_container_width=True)

with tab3:
    places_df = places_dataframe(profile.categories)
    st.dataframe(
        places_df,
        use_container_width=True,
        hide_index=True
    )

    # Download button
    csv = places_df.to_csv(index=False)
    st.download_button(
        "⬇️ Download CSV",
        csv,
        "nearby_places.csv",
        "text/csv"
    )

# Instructions at bottom
st.divider()
with st.expander("💡 How the scores work"):
    st.markdown("""
    ### Scores

    - **Walking Score**: weighted count of amenities within 1 mile. Groceries and
      transit count most, restaurants and gyms next; any other tagged amenity or shop
      adds a little.
    - **Driving Score**: the same idea over 10 miles with lighter weights, so a
      wider spread of amenities is needed to reach 100.
    - **Urban Index**: places within half a mile count triple, places within a mile
      count once, and restaurants/cafés and transit stops add extra weight.
      100+ is Urban, 30+ is Suburban, anything lower is Rural.

    ### Data
    - Addresses are geocoded with Nominatim; amenities come from OpenStreetMap.
    - **Demo data** scatters synthetic places around Times Square without any
      network calls.
    """)
