"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input)
    - Wire format is camelCase; Python attributes are snake_case
    - Domain enums from core/ used for enum fields
"""
