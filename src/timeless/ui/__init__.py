"""Streamlit user interface for timeless application."""
