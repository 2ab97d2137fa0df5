"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic (errors excepted)
    - All driver exceptions mapped to DatabaseError

Design Decisions:
    - Thin wrappers over SQLAlchemy and logging, no business rules
"""
