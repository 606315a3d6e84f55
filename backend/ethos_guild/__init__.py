"""Ethos Guild Commerce Package — artifact catalog, checkout, settlement and ticketing.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
