"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response uses the {status, message, data|error} envelope
    - Thin routes delegate to services
"""
