from datetime import time

import streamlit as st
import pandas as pd

from flightstats import config
from flightstats.errors import DecodeError
from flightstats.kpis import (
    airline_summary,
    average_duration_across_all,
    find_busiest_routes,
    flights_before_cutoff,
    flights_between_airports,
    flights_matching_airports,
)
from flightstats.load import load_flights
from flightstats.preprocess import flights_to_frame, project_flights
from flightstats.visualize import build_airline_totals_figure, build_duration_vs_volume_figure

# --- Page Configuration ---
st.set_page_config(
    page_title="Flight Time Analytics",
    page_icon="✈️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# --- Helper Functions ---

@st.cache_data
def load_data(file_path, roll_overnight):
    """Loads and projects the flight file with caching."""
    records = load_flights(file_path)
    flights = project_flights(records, on_missing='skip', roll_overnight=roll_overnight)
    return records, flights


def records_table(records):
    return pd.DataFrame([
        {
            'flight_number': r.flight_number,
            'airline': r.airline_name,
            'origin': r.departure.airport_name,
            'departure': r.departure.scheduled_at,
            'destination': r.arrival.airport_name,
            'arrival': r.arrival.scheduled_at,
        }
        for r in records
    ])


# --- Sidebar ---
st.sidebar.title("Navigation")
file_path = st.sidebar.text_input("Flight file", value=config.FLIGHTS_FILE)
roll_overnight = st.sidebar.checkbox("Roll overnight arrivals", value=config.ROLL_OVERNIGHT)
page = st.sidebar.radio("Go to", ["Airline Overview", "Route Finder", "Departures Before"])

try:
    records, flights = load_data(file_path, roll_overnight)
except DecodeError as e:
    st.error(f"Could not load flights: {e}")
    st.stop()

# --- Main App ---

if page == "Airline Overview":
    st.title("✈️ Airline Overview")
    st.markdown(f"{len(flights)} flights with a complete schedule out of {len(records)} records.")

    summary = airline_summary(flights)
    st.metric(label="Average flight time (all airlines)", value=f"{average_duration_across_all(flights):.2f} h")

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Flight Time per Airline")
        st.dataframe(summary)
    with col2:
        st.subheader("Busiest Routes")
        st.dataframe(find_busiest_routes(flights))

    if not summary.empty:
        st.header("Visual Analysis")
        st.plotly_chart(build_airline_totals_figure(summary), use_container_width=True)
        st.plotly_chart(build_duration_vs_volume_figure(summary), use_container_width=True)


elif page == "Route Finder":
    st.title("🧭 Route Finder")

    col1, col2, col3 = st.columns(3)
    with col1:
        origin = st.text_input("Departure airport")
    with col2:
        destination = st.text_input("Arrival airport")
    with col3:
        contains = st.checkbox("Match part of the name")

    if origin and destination:
        if contains:
            matches = flights_to_frame(flights_matching_airports(flights, origin, destination))
        else:
            matches = records_table(flights_between_airports(records, origin, destination))
        st.markdown(f"**{len(matches)}** flight(s) found.")
        st.dataframe(matches)
    else:
        st.info("Enter both airport names to search.")


elif page == "Departures Before":
    st.title("🌙 Departures Before a Time of Day")

    cutoff = st.time_input("Cutoff", value=time(1, 0))
    early = flights_before_cutoff(records, cutoff, roll_overnight=roll_overnight)
    st.markdown(f"**{len(early)}** flight(s) depart before {cutoff.strftime('%H:%M')}.")
    st.dataframe(flights_to_frame(early))
