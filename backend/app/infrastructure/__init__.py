"""Infrastructure Layer — storage adapters and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All storage calls map driver failures to DatabaseError

Design Decisions:
    - Repositories implement core/repository_protocols.py structurally
"""
