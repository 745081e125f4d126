"""Scouting Platform API package — clubs, player profiles, match analysis requests.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
