"""
Test suite for timeless application.

Unit tests for the timeline core, models, services and Streamlit UI live
under unit/; application entry point tests sit at this level.
"""
