"""Infrastructure - process-level plumbing (logging setup).

Invariants:
    - Nothing here imports from api/ or services/
"""
