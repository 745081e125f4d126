"""Core Layer — domain types, errors, and pure formatting/parsing helpers.

Invariants:
    - No IO: nothing in core/ touches the database, network, or filesystem
    - Infrastructure and routes import from core/, never the reverse
"""
