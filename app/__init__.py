"""Stockroom Streamlit application."""

from .main import main

__all__ = ["main"]
