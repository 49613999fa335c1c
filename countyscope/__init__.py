"""
CountyScope Package.

Top industries for the county containing a U.S. ZIP code, built with
Flask, Requests, and NumPy on top of the Census CBP, Census NAICS and
HUD crosswalk APIs.

Modules:
    api/         REST endpoints for industries, NAICS lookups, and status
    models/      Dataclasses (CountyInfo, IndustryRecord, NaicsCode)
    ingestion/   Clients for the HUD, Census CBP and NAICS search APIs
    services/    ZIP resolution, taxonomy drill-down, and orchestration
    analytics/   NumPy-based ranking and industry-mix summaries
    cache.py     Thread-safe in-memory cache for taxonomy lookups
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
