import os
import sys
import asyncio
from typing import List, Optional

import streamlit as st
from streamlit_folium import st_folium

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from qap_core.amenities import AmenityRecord
from qap_core.calculator import evaluate_location, scorer_from_settings, source_from_settings
from qap_core.config import Settings
from qap_core.errors import QAPError
from qap_core.jurisdictions import (
    CALIFORNIA,
    JURISDICTIONS,
    TEXAS,
    category_breakdown,
    total_points,
)
from qap_core.locations import Location, cities_for, resolve_location, zip_codes_for
from qap_core.logging_utils import configure_logging
from qap_core.mapping import build_location_map, map_widget_key
from qap_core.report import QAPReport, default_report_filename, export_report_pdf


@st.cache_resource(show_spinner=False)
def load_settings() -> Settings:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return settings


def reset_results():
    st.session_state.report = None


def render_location_form() -> Optional[Location]:
    """Sidebar state/city/ZIP/address selection. Returns the applied location."""
    with st.sidebar:
        st.header("Location Selection")
        st.caption("Select the state, city, and enter address details")

        state = st.selectbox("State", ["", TEXAS, CALIFORNIA],
                             format_func=lambda s: s or "Select a state")
        cities = cities_for(state)
        city = st.selectbox("City", [""] + cities, disabled=not cities,
                            format_func=lambda c: c or "Select a city")
        zip_codes = zip_codes_for(city)
        zip_code = st.selectbox("ZIP Code", [""] + zip_codes, disabled=not zip_codes,
                                format_func=lambda z: z or "Select a ZIP code")
        address = st.text_input("Street Address", placeholder="123 Main St")

        if st.button("Update Location", type="primary"):
            if not (state and city and zip_code and address.strip()):
                st.error("State, city, ZIP code and address are all required.")
            else:
                try:
                    st.session_state.location = resolve_location(state, city, zip_code, address)
                    reset_results()
                    st.success(f"Selected: {st.session_state.location.label}")
                except QAPError as e:
                    st.error(str(e))

    return st.session_state.location


def render_scoring_table(state: str):
    st.markdown(f"**{state} QAP Scoring Criteria**")
    rows = [
        {"Category": r["category"], "Max Points": f"{r['max_points']:g}", "Data Source": r["data_source"]}
        for r in category_breakdown(state, 0.0)
    ]
    rows.append({"Category": "Total", "Max Points": f"{total_points(state):g}", "Data Source": ""})
    st.table(rows)


def render_score(report: QAPReport, settings: Settings):
    result = report.result
    scorer = scorer_from_settings(settings)

    st.subheader("📊 Score Breakdown")
    col1, col2 = st.columns([1, 2])
    with col1:
        st.metric("Your QAP Score", report.percentage_text())
        st.caption(f"Development Location: {result.normalized_points:.2f} of "
                   f"{result.max_points:g} points (based on {result.amenity_count} nearby amenities)")
    with col2:
        st.write(f"• Variety: {result.variety_points:.2f} / {scorer.thresholds.variety_points:g}")
        st.write(f"• Volume: {result.volume_points:.2f} / {scorer.thresholds.volume_points:g}")
        st.write(f"• Proximity: {result.proximity_points:.2f} / {scorer.thresholds.proximity_points:g}")
        st.write(f"• Raw: {result.raw_points:.2f} / {scorer.thresholds.max_raw_points:g}")

    recommendations = scorer.get_recommendations(result)
    if recommendations:
        st.subheader("💡 Notes")
        for rec in recommendations:
            st.write(f"• {rec}")

    with st.expander("🏪 Nearby Amenities"):
        st.table([
            {"Type": a.category.label, "Name": a.display_name, "Distance (km)": f"{a.distance_km:.1f}"}
            for a in report.amenities
        ] or [{"Type": "-", "Name": "No amenities found", "Distance (km)": "-"}])

    pdf_bytes = export_report_pdf(report)
    st.download_button(
        "📄 Export PDF Report",
        data=pdf_bytes,
        file_name=default_report_filename(report),
        mime="application/pdf",
    )


def main():
    st.set_page_config(page_title="LIHTC QAP Calculator", layout="wide")
    st.title("🏠 LIHTC QAP Calculator")
    st.markdown("Estimate a Qualified Allocation Plan score for a site in Texas or California.")

    if 'location' not in st.session_state:
        st.session_state.location = None
    if 'report' not in st.session_state:
        st.session_state.report = None

    try:
        settings = load_settings()
    except QAPError as e:
        st.error(f"Configuration error: {e}")
        st.stop()

    location = render_location_form()

    left, right = st.columns([1, 1])
    with left:
        st.subheader("QAP Score Calculator")
        if location is None or location.state not in JURISDICTIONS:
            st.info("Please select a state to view QAP scoring criteria")
        else:
            render_scoring_table(location.state)
            if st.button("Calculate QAP Score", use_container_width=True):
                with st.spinner("Looking up nearby amenities..."):
                    source = source_from_settings(settings)
                    st.session_state.report = asyncio.run(
                        evaluate_location(location, source, scorer_from_settings(settings))
                    )
                st.success(f"Your location has a score of {st.session_state.report.percentage_text()}")

        if st.session_state.report is not None:
            render_score(st.session_state.report, settings)

    with right:
        st.subheader("🗺️ Location Map")
        st.caption("Interactive map showing your location and nearby amenities")
        amenities: List[AmenityRecord] = st.session_state.report.amenities if st.session_state.report else []
        m = build_location_map(location, amenities)
        generated_at = st.session_state.report.generated_at if st.session_state.report else None
        map_key = map_widget_key(location, amenities, generated_at)
        st_folium(m, width=700, height=500, key=map_key, returned_objects=[])

    st.divider()
    st.caption("LIHTC QAP Calculator | Developed for Texas & California. "
               "Nearby amenities are demo data; only the Development Location category is scored.")


if __name__ == "__main__":
    main()
