"""Reusable Streamlit components."""
