"""
timeless - Personal memories timeline web application with Streamlit

A web application for keeping dated photo memories with features including:
- Photo upload to an external asset host (Cloudinary or Google Cloud Storage)
- Memory persistence with DuckDB
- Horizontal day-by-day timeline with month grouping
- Per-memory image carousel with swipe navigation
"""

__version__ = "0.1.0"
__author__ = "timeless"
__description__ = "Personal memories timeline web application with Streamlit"
