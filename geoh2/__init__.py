"""
Core package for the GeoH2 dashboard.

Submodules provide hexagon ingestion, cost resolution, statistics, ranking
and export (``geoh2.data``) and the Streamlit rendering helpers
(``geoh2.ui``) that are orchestrated by the top-level ``app.py``.
"""
