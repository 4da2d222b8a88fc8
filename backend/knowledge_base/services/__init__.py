"""Services Layer - imperative shell around the pure group store.

Invariants:
    - Services call core commands and translate rejections into KnowledgeBaseError
    - Services never re-implement a core rule

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
