"""Metric Engine — five heuristic scorers sharing one pass of token statistics.

Invariants:
    - Every MetricResult.score is in [0, 1]
    - compute_token_stats() walks the token list exactly once
    - Empty input: structural/logical/ethical return 0.0 labelled "Empty";
      ambiguity (no vague terms) returns 1.0; modal profile returns 0.0 with zero counts
    - Scores are lexical counts, not semantic analysis

Design Decisions:
    - Each scorer accepts precomputed TokenStats so score_all() shares one pass
    - Scorer-specific extras (hits, counts) live in MetricResult.details
"""

import math
from dataclasses import dataclass, field

from ruliad.core.domain_types import Score, TokenTag
from ruliad.core.lexicon import (
    STAT_MODALS, HARMFUL_WORDS, PROTECTIVE_WORDS, PERSON_WORDS,
    MODALS_OBLIGATION, MODALS_PERMISSION, MODALS_RECOMMENDATION, VAGUE_TERMS,
)
from ruliad.core.scoring_constants import (
    STRUCTURAL_VERB_WEIGHT, STRUCTURAL_LENGTH_WEIGHT, STRUCTURAL_MIN_TOKENS,
    STRUCTURAL_PREP_WEIGHT, STRUCTURAL_CLEAN_WEIGHT,
    LOGICAL_VERB_WEIGHT, LOGICAL_PREP_WEIGHT, LOGICAL_QUANT_MODAL_WEIGHT,
    LOGICAL_NEGATION_WEIGHT,
    ETHICAL_BASE_SCORE, ETHICAL_WORD_WEIGHT,
    AMBIGUITY_PENALTY, AMBIGUITY_MAX_PENALTY_TERMS,
    SCORE_THRESHOLD_STRONG, SCORE_THRESHOLD_MODERATE, SCORE_THRESHOLD_WEAK,
    ETHICAL_THRESHOLD_WEAK_ALIGNED, ETHICAL_THRESHOLD_MIXED,
)
from ruliad.core.tokenize_clause import Token, find_phrases


@dataclass(frozen=True)
class MetricResult:
    """Uniform scorer output."""
    score: Score
    label: str
    notes: str
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "formatted": format_score(self.score),
            "label": self.label,
            "notes": self.notes,
            "details": self.details,
        }


@dataclass(frozen=True)
class TokenStats:
    """Counts shared by all scorers."""
    total: int = 0
    verbs: int = 0
    preps: int = 0
    quantifiers: int = 0
    modals: int = 0
    negations: int = 0
    garbage: int = 0


def _clamp(value: float) -> Score:
    return Score(max(0.0, min(1.0, value)))


def compute_token_stats(tokens: list[Token]) -> TokenStats:
    """Single pass over classified tokens."""
    verbs = preps = quantifiers = modals = negations = garbage = 0
    for t in tokens:
        if t.tag == TokenTag.VERB:
            verbs += 1
        elif t.tag == TokenTag.PREP:
            preps += 1
        elif t.tag == TokenTag.QUANT:
            quantifiers += 1
        elif t.tag == TokenTag.NEG:
            negations += 1
        if t.lower_text in STAT_MODALS:
            modals += 1
        if t.clean_text == "":
            garbage += 1
    return TokenStats(
        total=len(tokens), verbs=verbs, preps=preps, quantifiers=quantifiers,
        modals=modals, negations=negations, garbage=garbage,
    )


def _band_label(score: float, strong: str, moderate: str, weak: str, none: str) -> str:
    if score >= SCORE_THRESHOLD_STRONG:
        return strong
    if score >= SCORE_THRESHOLD_MODERATE:
        return moderate
    if score > SCORE_THRESHOLD_WEAK:
        return weak
    return none


# ─── Structural form ────────────────────────────────────────────

def score_structural_form(tokens: list[Token], stats: TokenStats | None = None) -> MetricResult:
    """Surface sentence-likeness: verb, length, prepositions, noise."""
    if not tokens:
        return MetricResult(0.0, "Empty", "No text provided.")
    stats = stats or compute_token_stats(tokens)

    score = 0.0
    if stats.verbs > 0:
        score += STRUCTURAL_VERB_WEIGHT
    if stats.total >= STRUCTURAL_MIN_TOKENS:
        score += STRUCTURAL_LENGTH_WEIGHT
    if stats.preps > 0:
        score += STRUCTURAL_PREP_WEIGHT
    if stats.garbage == 0:
        score += STRUCTURAL_CLEAN_WEIGHT
    score = _clamp(round(score, 10))

    label = _band_label(
        score,
        "Strong sentence-like structure",
        "Reasonably structured clause",
        "Fragmentary or weakly structured",
        "Non-sentential text",
    )
    noise = (
        f"Garbage tokens: {stats.garbage}" if stats.garbage
        else "No obvious noise tokens"
    )
    notes = (
        f"Tokens: {stats.total} · Verbs: {stats.verbs} · "
        f"Prepositions: {stats.preps} · {noise}"
    )
    return MetricResult(score, label, notes)


# ─── Logical form ───────────────────────────────────────────────

def score_logical_form(tokens: list[Token], stats: TokenStats | None = None) -> MetricResult:
    """Visible logical commitment: predicates, relations, quantifiers, negation."""
    if not tokens:
        return MetricResult(0.0, "Empty", "Empty clause.")
    stats = stats or compute_token_stats(tokens)

    score = 0.0
    if stats.verbs > 0:
        score += LOGICAL_VERB_WEIGHT
    if stats.preps > 0:
        score += LOGICAL_PREP_WEIGHT
    if stats.quantifiers + stats.modals > 0:
        score += LOGICAL_QUANT_MODAL_WEIGHT
    if stats.negations > 0 and stats.verbs > 0:
        score += LOGICAL_NEGATION_WEIGHT
    score = _clamp(round(score, 10))

    label = _band_label(
        score,
        "Strong logical form",
        "Moderate logical form",
        "Weak or implicit logical form",
        "No visible logical commitment",
    )
    notes = (
        f"Verbs: {stats.verbs} · Preposition-based relations: {stats.preps} · "
        f"Quantifiers: {stats.quantifiers} · Modals: {stats.modals} · "
        f"Negations: {stats.negations}"
    )
    return MetricResult(score, label, notes)


# ─── Ethical alignment ──────────────────────────────────────────

def _ethical_label(score: float) -> str:
    if score >= SCORE_THRESHOLD_STRONG:
        return "Likely CI-aligned (protective / respectful orientation)"
    if score >= ETHICAL_THRESHOLD_WEAK_ALIGNED:
        return "Weakly CI-aligned (mildly protective / neutral)"
    if score >= ETHICAL_THRESHOLD_MIXED:
        return "Ambiguous / mixed in moral orientation"
    if score > SCORE_THRESHOLD_WEAK:
        return "Likely CI-violating (tendency toward instrumentalizing others)"
    return "No explicit moral polarity detected"


def score_ethical_alignment(tokens: list[Token]) -> MetricResult:
    """Categorical-imperative proxy: protective vs harmful wording around persons."""
    if not tokens:
        return MetricResult(0.0, "Empty", "No content for moral assessment.")

    good = bad = 0
    hits: list[str] = []
    persons_present = False
    for t in tokens:
        if t.lower_text in PROTECTIVE_WORDS:
            good += 1
            hits.append("+" + t.clean_text)
        elif t.lower_text in HARMFUL_WORDS:
            bad += 1
            hits.append("-" + t.clean_text)
        if t.lower_text in PERSON_WORDS:
            persons_present = True

    score = _clamp(round(ETHICAL_BASE_SCORE + (good - bad) * ETHICAL_WORD_WEIGHT, 10))
    warning = persons_present and bad > 0
    hint = persons_present and good > 0 and bad == 0

    parts = [f"Good indicators: {good} · Bad indicators: {bad}"]
    parts.append(
        "Polarity hits: " + ", ".join(hits) if hits
        else "No explicit moral polarity tokens found."
    )
    if warning:
        parts.append(
            "CI warning: persons appear in the clause combined with harmful/instrumental "
            "verbs; this suggests a risk of treating persons as mere means."
        )
    elif hint:
        parts.append(
            "CI hint: persons appear together with protective/respectful language; "
            "this leans toward treating persons as ends in themselves."
        )
    parts.append(
        "Heuristic: CI focuses on universalizability and treating persons as ends; "
        "this proxy only inspects local wording."
    )

    return MetricResult(score, _ethical_label(score), " · ".join(parts), {
        "protective": good,
        "harmful": bad,
        "hits": hits,
        "persons_present": persons_present,
        "ci_warning": warning,
        "ci_hint": hint,
    })


# ─── Ambiguity ──────────────────────────────────────────────────

def score_ambiguity(tokens: list[Token]) -> MetricResult:
    """Higher is clearer: each vague/open-textured term costs 0.08 (max 10 terms)."""
    hits = [phrase for _, phrase in find_phrases(tokens, VAGUE_TERMS)]
    count = len(hits)
    score = _clamp(round(1.0 - min(count, AMBIGUITY_MAX_PENALTY_TERMS) * AMBIGUITY_PENALTY, 10))

    if count == 0:
        label = "Low linguistic vagueness"
        notes = "No obvious vague or open-textured terms detected."
    else:
        label = "Contains vague / open-textured terms"
        notes = "Vague terms: " + ", ".join(hits) + "."
    return MetricResult(score, label, notes, {"hits": hits})


# ─── Modal profile ──────────────────────────────────────────────

_MODAL_SETS = (
    ("obligation", MODALS_OBLIGATION),
    ("permission", MODALS_PERMISSION),
    ("recommendation", MODALS_RECOMMENDATION),
)


def score_modal_profile(tokens: list[Token]) -> MetricResult:
    """Obligation / permission / recommendation tally; score is modal density."""
    counts = {name: len(find_phrases(tokens, words)) for name, words in _MODAL_SETS}
    total = sum(counts.values())
    score = _clamp(total / len(tokens)) if tokens else 0.0

    if total == 0:
        label = "No modal operators"
    else:
        top = max(counts.values())
        leaders = [name for name, c in counts.items() if c == top]
        label = (
            f"{leaders[0].capitalize()}-dominant" if len(leaders) == 1
            else "Mixed modality"
        )
    summary = (
        f"Obligation: {counts['obligation']} · Permission: {counts['permission']} · "
        f"Recommendation: {counts['recommendation']}"
    )
    return MetricResult(score, label, summary, {"counts": counts})


# ─── Orchestration ──────────────────────────────────────────────

def score_all(tokens: list[Token]) -> dict[str, MetricResult]:
    """Run all five scorers over one shared statistics pass."""
    stats = compute_token_stats(tokens)
    return {
        "structural": score_structural_form(tokens, stats),
        "logical": score_logical_form(tokens, stats),
        "ethical": score_ethical_alignment(tokens),
        "ambiguity": score_ambiguity(tokens),
        "modal_profile": score_modal_profile(tokens),
    }


def format_score(score: float | None) -> str:
    """Human-readable percentage, e.g. 'score: 57/100'."""
    if score is None or not math.isfinite(score):
        return "score: —"
    return f"score: {round(score * 100)}/100"
