"""Services Layer — task, folder and orchestration logic over storage protocols.

Invariants:
    - Services depend on core/ protocols, never on a concrete database session
    - Every method takes the owner explicitly; nothing reads request state

Design Decisions:
    - One file per entity plus one orchestrator for kind-ambiguous operations
"""
