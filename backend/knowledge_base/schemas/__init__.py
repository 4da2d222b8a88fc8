"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate shape and length at the system boundary
    - Group and URL rules stay in core/ so every rejection keeps its error kind

Design Decisions:
    - Separate from core: schemas are API contracts, core is domain state
"""
