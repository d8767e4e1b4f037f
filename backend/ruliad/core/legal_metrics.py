"""Legal Scoring Layer — clarity, enforceability, risk, completeness, entities.

Invariants:
    - Every scorer returns a MetricResult; empty input scores 0.0
    - clarity, risk and completeness range over [0, 1]; risk is "lower is better"
    - enforceability ranges over [0.5, 1] for non-empty input (neutral base 0.5);
      it is NOT on the same scale as the other metrics and is never averaged with them
    - Multi-word legal terms ("pursuant to", "sole discretion") are matched as phrases

Design Decisions:
    - Reuses MetricResult and find_phrases from the clause metric engine
    - No composite "overall quality" score is produced
"""

import re

from ruliad.core.lexicon import (
    LEGAL_VAGUE_TERMS, LEGAL_PRECISE_TERMS, DEFINITION_MARKERS,
    BINDING_VERBS, CONSIDERATION_TERMS, PARTY_TERMS, FORMAL_TERMS,
    RISK_AMBIGUOUS_TERMS, ONE_SIDED_TERMS, PROBLEMATIC_TERMS, PROTECTIVE_QUALIFIERS,
    COMPLETENESS_CHECKS, OBLIGATION_ACTION_VERBS, DOCUMENT_TYPE_PATTERNS,
)
from ruliad.core.domain_types import TokenTag
from ruliad.core.score_metrics import MetricResult
from ruliad.core.tokenize_clause import Token, find_phrases, clause_text

_OPTIMAL_CLAUSE_LENGTH = 30.0
_ENUMERATION_RE = re.compile(r"^\([a-z0-9]+\)$")
_PROPER_CAPS_RE = re.compile(r"^[A-Z][a-z]+$")

_DATE_RE = re.compile(
    r"\b(\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}|(?:January|February|March|April|May|June|July|"
    r"August|September|October|November|December)\s+\d{1,2},?\s+\d{4})\b",
    re.IGNORECASE,
)
_AMOUNT_RE = re.compile(r"\$[\d,]+(?:\.\d{2})?|\b\d+\s+(?:dollars?|USD|EUR|GBP)\b", re.IGNORECASE)
_PARTY_RE = re.compile(
    r"\b[A-Z][a-z]+(?: [A-Z][a-z]+)*(?:,? (?:Inc\.|LLC|Ltd\.|Corp\.|Corporation|Company))?"
)
_PARTY_EXCLUDE = frozenset({"The", "This", "That", "Party", "Section", "Article"})
_OBLIGATION_MODALS = frozenset({"shall", "must", "will"})


def _count(tokens: list[Token], terms: frozenset[str]) -> int:
    return len(find_phrases(tokens, terms))


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


# ─── Clarity ────────────────────────────────────────────────────

def score_legal_clarity(tokens: list[Token]) -> MetricResult:
    """0.4·readability + 0.4·precision + 0.2·structure."""
    if not tokens:
        return MetricResult(0.0, "Empty", "No text to analyze.")

    n = len(tokens)
    length_score = 1.0 - min(1.0, abs(n - _OPTIMAL_CLAUSE_LENGTH) / _OPTIMAL_CLAUSE_LENGTH)

    vague = _count(tokens, LEGAL_VAGUE_TERMS)
    precise = _count(tokens, LEGAL_PRECISE_TERMS)
    precision_score = max(0.0, min(1.0, 0.5 + (precise - vague) / n * 2.0))

    has_definitions = any(t.lower_text in DEFINITION_MARKERS for t in tokens)
    has_enumeration = any(_ENUMERATION_RE.match(t.raw_text) for t in tokens)
    proper_caps = sum(1 for t in tokens if _PROPER_CAPS_RE.match(t.clean_text))
    structure_score = (
        (0.4 if has_definitions else 0.0)
        + (0.3 if has_enumeration else 0.0)
        + min(0.3, proper_caps / n * 1.5)
    )

    clarity = max(0.0, min(1.0, 0.4 * length_score + 0.4 * precision_score + 0.2 * structure_score))
    label = "Clear" if clarity >= 0.7 else ("Moderate" if clarity >= 0.4 else "Unclear")
    structure_desc = ("definitions" if has_definitions else "no definitions") + (
        ", enumerated" if has_enumeration else ""
    )
    notes = (
        f"Readability: {length_score * 100:.0f}% (length={n}, optimal=30). "
        f"Precision: {precision_score * 100:.0f}% ({precise} precise, {vague} vague). "
        f"Structure: {structure_score * 100:.0f}% ({structure_desc})."
    )
    return MetricResult(clarity, label, notes)


# ─── Enforceability ─────────────────────────────────────────────

def score_legal_enforceability(tokens: list[Token]) -> MetricResult:
    """Neutral base 0.5 plus binding, consideration, party and formality signals."""
    if not tokens:
        return MetricResult(0.0, "Invalid", "No contractual language present.")

    score = 0.5
    elements = []
    binding = _count(tokens, BINDING_VERBS)
    if binding:
        score += 0.2
        elements.append("binding language")
    if _count(tokens, CONSIDERATION_TERMS):
        score += 0.15
        elements.append("consideration")
    if _count(tokens, PARTY_TERMS):
        score += 0.1
        elements.append("identified parties")
    formality = _count(tokens, FORMAL_TERMS)
    if formality:
        score += min(0.05, formality * 0.02)
        elements.append("formal language")

    score = min(1.0, round(score, 10))
    label = "Enforceable" if score >= 0.7 else ("Questionable" if score >= 0.4 else "Weak")
    verdict = "Likely enforceable." if score >= 0.7 else "May lack essential contract elements."
    notes = (
        f"Elements detected: {', '.join(elements) if elements else 'none'}. "
        f"Binding verbs: {binding}. Formality: {formality} formal terms. {verdict}"
    )
    return MetricResult(score, label, notes, {"elements": elements, "range": [0.5, 1.0]})


# ─── Risk ───────────────────────────────────────────────────────

def score_legal_risk(tokens: list[Token]) -> MetricResult:
    """Risk from ambiguity, one-sided terms, problematic terms, missing qualifiers."""
    if not tokens:
        return MetricResult(0.0, "No Risk", "No content to evaluate.")

    risk = 0.0
    issues = []
    ambiguous = _count(tokens, RISK_AMBIGUOUS_TERMS)
    if ambiguous > 2:
        risk += min(0.3, ambiguous * 0.05)
        issues.append(f"{ambiguous} ambiguous terms")
    one_sided = _count(tokens, ONE_SIDED_TERMS)
    if one_sided:
        risk += min(0.25, one_sided * 0.1)
        issues.append(f"{one_sided} one-sided terms")
    problematic = _count(tokens, PROBLEMATIC_TERMS)
    if problematic:
        risk += min(0.3, problematic * 0.15)
        issues.append(f"{problematic} problematic terms")
    if not _count(tokens, PROTECTIVE_QUALIFIERS) and len(tokens) > 10:
        risk += 0.15
        issues.append("no protective qualifiers")

    risk = min(1.0, round(risk, 10))
    label = "Low Risk" if risk <= 0.3 else ("Moderate Risk" if risk <= 0.6 else "High Risk")
    notes = (
        f"Risks: {', '.join(issues)}. Review carefully." if issues
        else "No significant risks detected. Language appears balanced."
    )
    return MetricResult(risk, label, notes, {"issues": issues})


# ─── Completeness ───────────────────────────────────────────────

def score_legal_completeness(tokens: list[Token]) -> MetricResult:
    """Share of the six essential contract elements present."""
    if not tokens:
        return MetricResult(0.0, "Incomplete", "No contractual provisions present.")

    words = {t.lower_text for t in tokens}
    present = [name for name, keywords in COMPLETENESS_CHECKS if words & keywords]
    missing = [name for name, _ in COMPLETENESS_CHECKS if name not in present]
    score = round(len(present) / len(COMPLETENESS_CHECKS), 10)

    label = "Complete" if score >= 0.8 else ("Partial" if score >= 0.5 else "Incomplete")
    notes = (
        f"Present: {', '.join(present) if present else 'none'}. "
        f"Missing: {', '.join(missing) if missing else 'none'}."
    )
    return MetricResult(score, label, notes, {"present": present, "missing": missing})


# ─── Entities & document type ───────────────────────────────────

def _extract_obligations(tokens: list[Token]) -> list[str]:
    obligations = []
    for i, t in enumerate(tokens[:-1]):
        if t.lower_text not in _OBLIGATION_MODALS:
            continue
        if tokens[i + 1].lower_text not in OBLIGATION_ACTION_VERBS:
            continue
        phrase = [t.raw_text, tokens[i + 1].raw_text]
        for follower in tokens[i + 2:i + 6]:
            if follower.tag == TokenTag.PREP or not follower.clean_text:
                break
            phrase.append(follower.raw_text)
        obligations.append(" ".join(phrase))
    return obligations


def extract_contract_entities(tokens: list[Token]) -> dict:
    """Dates, monetary amounts, obligation phrases, capitalised party names."""
    text = clause_text(tokens)
    return {
        "parties": _unique([
            p for p in (m.group(0) for m in _PARTY_RE.finditer(text))
            if p not in _PARTY_EXCLUDE
        ]),
        "obligations": _extract_obligations(tokens),
        "dates": _unique([m.group(0) for m in _DATE_RE.finditer(text)]),
        "amounts": _unique([m.group(0) for m in _AMOUNT_RE.finditer(text)]),
    }


def detect_document_type(tokens: list[Token]) -> str:
    """Keyword vote over known document types; first declared type wins ties."""
    text = clause_text(tokens).lower()
    best_type, best_score = "General Legal Document", 0
    for doc_type, keywords in DOCUMENT_TYPE_PATTERNS:
        score = sum(1 for kw in keywords if kw in text)
        if score > best_score:
            best_type, best_score = doc_type, score
    return best_type


def analyze_legal(tokens: list[Token]) -> dict:
    """Full legal layer as a JSON-compatible dict."""
    return {
        "clarity": score_legal_clarity(tokens).to_dict(),
        "enforceability": score_legal_enforceability(tokens).to_dict(),
        "risk": score_legal_risk(tokens).to_dict(),
        "completeness": score_legal_completeness(tokens).to_dict(),
        "entities": extract_contract_entities(tokens),
        "document_type": detect_document_type(tokens),
    }
