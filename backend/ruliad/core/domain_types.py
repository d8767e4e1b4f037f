"""Domain Types — rich types that replace bare primitives across the core.

Invariants:
    - Every token tag, rewrite category, dependency kind and diff kind is an Enum
    - Score is bounded 0.0–1.0
    - str Enums serialize to JSON without custom encoders

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ClauseId = NewType("ClauseId", str)
StateId = NewType("StateId", str)
CacheKey = NewType("CacheKey", str)


# ─── Value Types ─────────────────────────────────────────────────

Score = NewType("Score", float)             # 0.0–1.0
Confidence = NewType("Confidence", float)   # (0.0, 1.0]


# ─── Enums ───────────────────────────────────────────────────────

class TokenTag(str, Enum):
    """Token tags, listed in classification priority order."""
    NEG = "NEG"
    PREP = "PREP"
    VERB = "VERB"
    QUANT = "QUANT"
    DET = "DET"
    CONJ = "CONJ"
    NUM = "NUM"
    WORD = "WORD"


TAG_ROLES: dict[TokenTag, str] = {
    TokenTag.NEG: "negation",
    TokenTag.PREP: "relational connector",
    TokenTag.VERB: "predicate / copula",
    TokenTag.QUANT: "quantifier",
    TokenTag.DET: "determiner",
    TokenTag.CONJ: "logical connector",
    TokenTag.NUM: "numeric literal",
    TokenTag.WORD: "content",
}


class RewriteCategory(str, Enum):
    """Transformation rule categories."""
    PRECISION = "precision"
    ENFORCEABILITY = "enforceability"
    RISK_REDUCTION = "risk-reduction"


class DependencyKind(str, Enum):
    """Why one clause depends on another."""
    CROSS_REFERENCE = "cross-reference"
    DEFINITION = "definition"
    TEMPORAL = "temporal"
    CONDITIONAL = "conditional"


class DiffKind(str, Enum):
    """Edit script operations."""
    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


class PillTone(str, Enum):
    """Status pill tones consumed by the presentation layer."""
    OK = "ok"
    WARN = "warn"
    BAD = "bad"
