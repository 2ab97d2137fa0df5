"""Services Layer — async handlers that load records, call the core, and persist.

Invariants:
    - Every write validates through core/ before touching the DB
    - Handlers never commit a partially validated change

Design Decisions:
    - One handler class per concern, each takes the request's AsyncSession
"""
