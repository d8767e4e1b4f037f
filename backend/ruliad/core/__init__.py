"""Core Layer — pure clause analysis, no IO, no async, no web framework.

Invariants:
    - No module in core/ imports from services/, api/, schemas/, or infrastructure/
    - All functions are pure and deterministic, except ResultCache (shared mutable state)
    - Cache and logger reach the core only through boundary_protocols

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
