"""Core Layer — pure quiz logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the shell loads records,
      the core validates and aggregates, the shell writes
"""
