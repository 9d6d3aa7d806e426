"""
Core package for the railway temperature exceedance dashboard.

Submodules provide data loading, normalisation, filtering, sorting and the
user interface rendering helpers that are orchestrated by the top-level `app.py`.
"""
