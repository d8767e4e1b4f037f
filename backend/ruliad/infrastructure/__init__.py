"""Infrastructure Layer — cross-cutting concerns shared by the shell.

Invariants:
    - Infrastructure never imports from core/ analysis logic
    - The core receives loggers by injection; only the shell configures handlers
"""
