"""
Schedule builder view.

Collects a schedule configuration, validates it locally, and forwards it
to the remote schedule service. The generated schedule is shown as
returned by the service.
"""

import asyncio
import logging

import streamlit as st

from route_explorer.adapters.http_schedule_client import HttpScheduleClient
from route_explorer.config import ExplorerConfig
from route_explorer.dashboard.runtime import load_airlines, load_airports
from route_explorer.exceptions import (
    InvalidFilterError,
    ListingUnavailableError,
    ScheduleServiceError,
)
from route_explorer.schemas.schedule import ScheduleConfig
from route_explorer.services.form_state import schedule_config_from_form
from route_explorer.services.search_service import search_airports

logger = logging.getLogger(__name__)

RESULT_KEY = "schedule_result"


def _call_schedule_service(config: ScheduleConfig, generate: bool) -> dict:
    async def _run():
        async with HttpScheduleClient() as client:
            if generate:
                return await client.generate(config)
            return await client.validate_config(config)

    return asyncio.run(_run())


def _select_start_airport() -> str:
    """Airport search box with suggestions; returns the chosen IATA code."""
    query = st.text_input("Start airport", placeholder="Search by name, city or IATA")
    if not query.strip():
        return ""

    try:
        airports = load_airports()
    except ListingUnavailableError as e:
        logger.error("Airport list unavailable: %s", e)
        return query.strip().upper()

    suggestions = search_airports(airports, query)
    if not suggestions:
        st.caption("No matching airports.")
        return ""
    chosen = st.selectbox(
        "Matching airports",
        suggestions,
        format_func=lambda a: f"{a.iata} - {a.name} ({a.city_name}, {a.country})",
    )
    return chosen.iata if chosen else ""


def render_schedule_view() -> None:
    """Render the schedule builder form and the service's response."""
    form = ExplorerConfig.schedule
    st.header("Schedule Builder")

    try:
        airlines = load_airlines()
    except ListingUnavailableError as e:
        logger.error("Airline list unavailable: %s", e)
        st.error("Failed to load airlines")
        return

    airline = st.selectbox(
        "Airline",
        [None] + list(airlines),
        format_func=lambda a: "Select an airline" if a is None else a.name,
    )
    start_airport = _select_start_airport()

    with st.form("schedule_form"):
        days = st.number_input(
            "Days", min_value=form.min_days, max_value=form.max_days, value=form.default_days
        )

        st.markdown("**Haul types**")
        col1, col2, col3 = st.columns(3)
        short = col1.checkbox("Short haul", value=True)
        medium = col2.checkbox("Medium haul", value=True)
        long_haul = col3.checkbox("Long haul", value=True)
        short_w = col1.number_input("Short weight", 0.0, 1.0, 0.5, 0.05)
        medium_w = col2.number_input("Medium weight", 0.0, 1.0, 0.3, 0.05)
        long_w = col3.number_input("Long weight", 0.0, 1.0, 0.2, 0.05)

        ratio = st.slider(
            "Preferred share of single-leg days", 0.0, 1.0, form.default_single_leg_ratio, 0.05
        )

        col4, col5 = st.columns(2)
        start_time = col4.text_input("Operating from (HH:MM)", value=form.default_operating_start)
        end_time = col5.text_input("Operating until (HH:MM)", value=form.default_operating_end)

        col6, col7 = st.columns(2)
        turnaround = col6.number_input(
            "Turnaround (minutes)", min_value=0, value=form.default_turnaround_minutes
        )
        rest_hours = col7.number_input(
            "Rest between long-haul legs (hours)", min_value=0, value=form.default_rest_hours
        )

        preferred_countries = st.text_input("Preferred countries (comma separated)")
        preferred_regions = st.text_input("Preferred regions (comma separated)")
        repetition_mode = st.checkbox("Repeat the first day's pattern")

        col_validate, col_generate = st.columns(2)
        validate_clicked = col_validate.form_submit_button("Validate")
        generate_clicked = col_generate.form_submit_button("Generate Schedule")

    if validate_clicked or generate_clicked:
        values = {
            "airline_id": airline.id if airline else None,
            "airline_name": airline.name if airline else "",
            "airline_iata": airline.iata if airline else None,
            "start_airport": start_airport,
            "days": days,
            "haul_preferences": {"short": short, "medium": medium, "long": long_haul},
            "haul_weighting": {"short": short_w, "medium": medium_w, "long": long_w},
            "prefer_single_leg_day_ratio": ratio,
            "operating_hours": {"start": start_time.strip(), "end": end_time.strip()},
            "turnaround_time_minutes": turnaround,
            "preferred_countries": preferred_countries,
            "preferred_regions": preferred_regions,
            "minimum_rest_hours_between_long_haul": rest_hours,
            "repetition_mode": repetition_mode,
        }
        try:
            config = schedule_config_from_form(values)
        except InvalidFilterError as e:
            st.error(e.message)
            return

        try:
            with st.spinner("Contacting schedule service..."):
                st.session_state[RESULT_KEY] = _call_schedule_service(
                    config, generate=generate_clicked
                )
        except ScheduleServiceError as e:
            logger.error("Schedule service failed: %s", e)
            st.error(f"Failed to generate schedule: {e.message}")
            return

    result = st.session_state.get(RESULT_KEY)
    if result is not None:
        st.subheader("Service response")
        st.json(result)
