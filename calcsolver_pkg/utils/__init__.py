"""Formatting and numeric helpers shared by the CLI and the Streamlit page."""
