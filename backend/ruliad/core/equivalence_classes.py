"""Equivalence Grouper — greedy partition of clauses by lexical similarity.

Invariants:
    - similarity = 0.6 · Jaccard(token sets) + 0.4 · structural agreement, in [0, 1]
    - Jaccard of two empty token sets is 0.0
    - Every clause id lands in exactly one class (singletons included)
    - Classes and their members follow input order
    - O(n²) comparisons: meant for one document's clauses, not a corpus
"""

from dataclasses import dataclass

from ruliad.core.dependency_graph import ClauseRecord, coerce_clause_records
from ruliad.core.lexicon import BINDING_VERBS, PARTY_TERMS
from ruliad.core.scoring_constants import (
    EQUIVALENCE_DEFAULT_THRESHOLD, EQUIVALENCE_JACCARD_WEIGHT, EQUIVALENCE_STRUCTURAL_WEIGHT,
)
from ruliad.core.tokenize_clause import tokenize_clause


@dataclass(frozen=True)
class ClauseProfile:
    """Token set plus coarse structural flags of one clause."""
    words: frozenset[str]
    has_obligations: bool
    has_parties: bool


def profile_clause(text: str) -> ClauseProfile:
    words = frozenset(t.lower_text for t in tokenize_clause(text) if t.lower_text)
    return ClauseProfile(
        words=words,
        has_obligations=bool(words & BINDING_VERBS),
        has_parties=bool(words & PARTY_TERMS),
    )


def jaccard(a: frozenset[str], b: frozenset[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def compute_clause_similarity(a: ClauseProfile, b: ClauseProfile) -> float:
    structural = (
        (1.0 if a.has_obligations == b.has_obligations else 0.0)
        + (1.0 if a.has_parties == b.has_parties else 0.0)
    ) / 2
    score = EQUIVALENCE_JACCARD_WEIGHT * jaccard(a.words, b.words) + EQUIVALENCE_STRUCTURAL_WEIGHT * structural
    return max(0.0, min(1.0, round(score, 10)))


def find_equivalence_classes(
    clauses: list,
    threshold: float = EQUIVALENCE_DEFAULT_THRESHOLD,
) -> list[list[str]]:
    """Seed a class with each unassigned clause and absorb all later matches."""
    records: list[ClauseRecord] = coerce_clause_records(clauses)
    profiles = [profile_clause(r.text) for r in records]
    assigned = [False] * len(records)
    classes = []

    for i, seed in enumerate(records):
        if assigned[i]:
            continue
        assigned[i] = True
        members = [seed.id]
        for j in range(i + 1, len(records)):
            if assigned[j]:
                continue
            if compute_clause_similarity(profiles[i], profiles[j]) >= threshold:
                assigned[j] = True
                members.append(records[j].id)
        classes.append(members)

    return classes
