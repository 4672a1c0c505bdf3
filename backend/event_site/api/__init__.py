"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (except the webhook ack and CSV export)

Design Decisions:
    - Thin routes delegate to services for anything beyond a single read/write
"""
