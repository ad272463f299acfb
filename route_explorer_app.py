"""
Route Explorer - Entry Point.

A Streamlit application for browsing flight routes served by the route
listing API: directional and either-endpoint route search, circular
routes, reference lists, and the schedule builder.

Usage:
    streamlit run route_explorer_app.py
"""

import logging

from route_explorer.dashboard import run_dashboard
from route_explorer.dashboard.components.styles import apply_custom_css, apply_page_config

# Configure logging for console output
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Apply Streamlit page configuration (must be first st call)
apply_page_config()
apply_custom_css()

run_dashboard()
