"""Core (UI-agnostic) tracker logic.

This package contains:
- the remote tracker client and the caching store in front of it
- project/report models and the built-in seed data
- filter normalization
- dashboard and history compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
