"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core modules never import api, services or infrastructure
    - The analyzer reaches its cache and logger only through these Protocols
    - Implementations are provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so ResultCache and
      logging.Logger satisfy the contracts without inheriting anything
    - Synchronous methods: the cache is in-memory and the core never awaits
"""

from typing import Any, Protocol


class AnalysisCache(Protocol):
    """Contract for whole-pipeline memoization — ResultCache implements it."""
    def get(self, key: str) -> Any | None: ...
    def set(self, key: str, value: Any) -> None: ...
    def has(self, key: str) -> bool: ...
    def stats(self) -> dict: ...


class LoggerLike(Protocol):
    """Subset of logging.Logger the core calls."""
    def debug(self, msg: str, *args: object, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: object, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: object, **kwargs: Any) -> None: ...
