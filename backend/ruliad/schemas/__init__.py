"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary, before the core is invoked
    - The core never sees a clause the schemas would reject
"""
