"""Page modules for the Stockroom Streamlit application."""

from .dashboard import render_page as render_dashboard_page

__all__ = [
    "render_dashboard_page",
]
