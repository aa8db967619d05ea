"""Request handlers behind the Streamlit pages."""
