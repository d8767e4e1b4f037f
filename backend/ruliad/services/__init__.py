"""Services Layer — glue between validated requests and the pure core.

Invariants:
    - Services own dependency wiring (cache, logger, settings)
    - Services never re-implement analysis; they call ruliad.core
"""
