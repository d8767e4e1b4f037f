"""Ruliad Console — heuristic clause analysis engine.

Invariants:
    - Package root holds metadata only (import side-effects prohibited)

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"
