"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON with Content-Type: application/json

Design Decisions:
    - Thin routes delegate to the store/auth capabilities
"""
