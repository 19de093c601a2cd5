"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Every request body is validated here before any store/auth call
    - Wire names are the ones clients already send (userId, productId)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
