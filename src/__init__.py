"""
Core package for the BigQuery load report.

Submodules provide warehouse loading and normalization, the filter/sort
derivation, and the Streamlit table rendering that the top-level `app.py`
wires together.
"""
