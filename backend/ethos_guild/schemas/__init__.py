"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; commerce rules live in core/
    - Domain enums from core/domain_types.py used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Response schemas read ORM rows directly (from_attributes=True)
"""
