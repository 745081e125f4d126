"""Infrastructure Layer — database engines, identity provider client, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver/SDK exceptions are mapped to core/errors.py types at this boundary
"""
