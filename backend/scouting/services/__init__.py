"""Service Layer — use-case functions called by thin route handlers.

Invariants:
    - Services raise core/errors.py types; they never build HTTP responses
    - Services commit their own unit of work; routes never call commit()
"""
