"""
Styling module for explorer appearance.

Provides functions for applying page configuration and custom CSS.
"""

import streamlit as st

from route_explorer.config import ExplorerConfig


def apply_page_config() -> None:
    """
    Apply Streamlit page configuration.

    Must be called before any other Streamlit commands.
    """
    config = ExplorerConfig.page
    st.set_page_config(
        page_title=config.title,
        page_icon=config.icon,
        layout=config.layout,
        initial_sidebar_state=config.sidebar_state,
    )


def apply_custom_css() -> None:
    """Tighten table spacing and style the either-endpoint banner."""
    css = """
    <style>
        .aggregate-banner {
            background-color: #dbeafe;
            color: #1e40af;
            border-radius: 6px;
            padding: 12px 16px;
            margin-bottom: 12px;
        }

        [data-testid="stDataFrame"] {
            margin-top: 4px;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
