"""Core Layer - pure group and membership logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Commands either fully apply or return a rejection dict with no mutation

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
