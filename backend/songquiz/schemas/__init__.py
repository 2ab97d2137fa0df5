"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models and core records: schemas are API contracts
    - Response schemas read core records/view models via from_attributes
"""
