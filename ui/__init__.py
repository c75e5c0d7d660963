"""Streamlit building blocks for the Stockroom dashboard."""
