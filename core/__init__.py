"""Core (UI-agnostic) contacts dashboard logic.

This package contains:
- data loading (remote CSV -> pandas)
- filter normalization and the substring filter
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
