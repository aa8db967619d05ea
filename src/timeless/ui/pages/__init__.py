"""Streamlit pages: timeline, create and edit."""
