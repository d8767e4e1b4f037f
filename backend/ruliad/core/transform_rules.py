"""Transformation Engine — fixed rewrite rules and candidate aggregation.

Invariants:
    - TRANSFORMATION_RULES is an immutable, ordered tuple; rules apply in table order
    - Matching is a case-insensitive substring test per token (per token window
      for multi-word patterns); every match yields one candidate
    - Each match replaces at most the first word-boundary occurrence of the
      pattern in the running text
    - No match anywhere -> empty candidate list and unchanged improved text
    - Every candidate confidence is in (0, 1]

Design Decisions:
    - Rules are NamedTuples so the multiway explorer can share the same table
    - Replacement goes through a callable so bracketed placeholders
      ("[X]", "[±X%]") are inserted literally, never parsed as group references
"""

import re
from dataclasses import dataclass
from typing import NamedTuple

from ruliad.core.domain_types import Confidence, RewriteCategory
from ruliad.core.tokenize_clause import Token, clause_text


class TransformationRule(NamedTuple):
    pattern: str
    replacement: str
    category: RewriteCategory
    confidence: float

    @property
    def label(self) -> str:
        return f"{self.category.value}: {self.pattern} → {self.replacement}"


_P = RewriteCategory.PRECISION
_E = RewriteCategory.ENFORCEABILITY
_R = RewriteCategory.RISK_REDUCTION

TRANSFORMATION_RULES: tuple[TransformationRule, ...] = (
    # Ambiguity → precision
    TransformationRule("may", "shall", _P, 0.9),
    TransformationRule("might", "will", _P, 0.8),
    TransformationRule("reasonable", "mutually agreed upon", _P, 0.7),
    TransformationRule("appropriate", "as specified in Exhibit A", _P, 0.7),
    TransformationRule("substantial", "exceeding [specific threshold]", _P, 0.6),
    TransformationRule("approximately", "within [±X%]", _P, 0.8),
    TransformationRule("as needed", "as specified in writing", _P, 0.7),
    TransformationRule("promptly", "within [N] business days", _P, 0.75),
    # Weak → binding language
    TransformationRule("should", "shall", _E, 0.9),
    TransformationRule("could", "will", _E, 0.8),
    TransformationRule("endeavor to", "shall", _E, 0.85),
    TransformationRule("use best efforts", "shall use commercially reasonable efforts", _E, 0.7),
    # One-sided → balanced
    TransformationRule("sole discretion", "reasonable discretion", _R, 0.9),
    TransformationRule("absolute", "subject to [specified limits]", _R, 0.85),
    TransformationRule("unlimited", "limited to [maximum amount]", _R, 0.95),
    TransformationRule("irrevocable", "revocable upon [specified conditions]", _R, 0.8),
    TransformationRule("perpetual", "for a term of [specified duration]", _R, 0.9),
    # Missing protections → safeguards
    TransformationRule("liable", "liable, subject to limitations in Section [X]", _R, 0.7),
    TransformationRule("indemnify", "indemnify to the extent permitted by law", _R, 0.75),
    TransformationRule("waive", "waive, except as required by applicable law", _R, 0.8),
)


@dataclass(frozen=True)
class TransformationCandidate:
    """One suggested rewrite anchored at a token position."""
    category: RewriteCategory
    original: str
    suggested: str
    confidence: Confidence
    source_pattern: str
    token_index: int

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "original": self.original,
            "suggested": self.suggested,
            "confidence": self.confidence,
            "source_pattern": self.source_pattern,
            "token_index": self.token_index,
        }


def _pattern_re(pattern: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(pattern) + r"\b", re.IGNORECASE)


def rule_matches(rule: TransformationRule, text: str) -> bool:
    """Case-insensitive substring test against free text."""
    return rule.pattern.lower() in text.lower()


def apply_rule_once(rule: TransformationRule, text: str) -> str:
    """Replace the first word-boundary occurrence of the rule pattern."""
    return _pattern_re(rule.pattern).sub(lambda _m: rule.replacement, text, count=1)


def _find_matches(rule: TransformationRule, tokens: list[Token]) -> list[tuple[int, str]]:
    width = len(rule.pattern.split(" "))
    needle = rule.pattern.lower()
    matches = []
    for start in range(len(tokens) - width + 1):
        window = tokens[start:start + width]
        if needle in " ".join(t.lower_text for t in window):
            matches.append((window[0].index, " ".join(t.clean_text for t in window)))
    return matches


def apply_transformation_rules(
    tokens: list[Token],
    rules: tuple[TransformationRule, ...] = TRANSFORMATION_RULES,
) -> dict:
    """Scan tokens with every rule and build candidates plus an improved text.

    Returns a JSON-compatible dict:
    {"candidates": [...], "improved_text": str, "metrics": {...}, "candidate_count": int}
    """
    candidates: list[TransformationCandidate] = []
    text = clause_text(tokens)

    for rule in rules:
        for token_index, original in _find_matches(rule, tokens):
            candidates.append(TransformationCandidate(
                category=rule.category,
                original=original,
                suggested=rule.replacement,
                confidence=Confidence(rule.confidence),
                source_pattern=rule.pattern,
                token_index=token_index,
            ))
            text = apply_rule_once(rule, text)

    return {
        "candidates": [c.to_dict() for c in candidates],
        "improved_text": text,
        "metrics": calculate_transformation_metrics(candidates),
        "candidate_count": len(candidates),
    }


def calculate_transformation_metrics(candidates: list[TransformationCandidate]) -> dict:
    """Per-category count, mean confidence and summed confidence ("impact")."""
    by_category: dict[RewriteCategory, list[float]] = {c: [] for c in RewriteCategory}
    for cand in candidates:
        by_category[cand.category].append(cand.confidence)

    metrics = {}
    for category, confidences in by_category.items():
        total = round(sum(confidences), 10)
        metrics[category.value] = {
            "count": len(confidences),
            "avg_confidence": round(total / len(confidences), 10) if confidences else 0.0,
            "total_impact": total,
        }
    return metrics
