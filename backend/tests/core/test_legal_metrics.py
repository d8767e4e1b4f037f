"""Legal scoring layer tests — clarity, enforceability, risk, completeness, entities.

Tests cover:
    - Empty input returns 0.0 for every legal scorer
    - Enforceability stays within its documented [0.5, 1] range
    - Binding + consideration + parties + formal language detected
    - Risk: one-sided and problematic terms raise risk; qualifiers lower it
    - Completeness counts the six essential elements
    - Entity extraction: amounts, dates, obligations, parties
    - Document type detection and fallback
"""

import pytest

from ruliad.core.classify_tokens import classify_tokens
from ruliad.core.legal_metrics import (
    analyze_legal, detect_document_type, extract_contract_entities,
    score_legal_clarity, score_legal_completeness, score_legal_enforceability,
    score_legal_risk,
)
from ruliad.core.tokenize_clause import tokenize_clause


def _tokens(text: str):
    return classify_tokens(tokenize_clause(text))


FULL_CONTRACT = (
    "Whereas the Vendor and the Client are parties hereto, the Vendor shall deliver "
    "the goods for a fee of $5,000.00 during the term, either party may terminate on "
    "notice, and this agreement is governed by the law of Delaware."
)


def test_empty_input_scores_zero():
    for scorer in (
        score_legal_clarity, score_legal_enforceability,
        score_legal_risk, score_legal_completeness,
    ):
        assert scorer([]).score == 0.0


def test_enforceability_base_is_neutral_half():
    result = score_legal_enforceability(_tokens("the sky is blue"))
    assert result.score == pytest.approx(0.5)
    assert result.label == "Questionable"
    assert result.details["range"] == [0.5, 1.0]


def test_enforceability_all_elements():
    result = score_legal_enforceability(_tokens(FULL_CONTRACT))
    assert set(result.details["elements"]) == {
        "binding language", "consideration", "identified parties", "formal language",
    }
    assert result.score == pytest.approx(0.97)
    assert result.label == "Enforceable"


@pytest.mark.parametrize("text", [
    "x",
    "hereby hereby hereby hereby hereby whereas pursuant",
    FULL_CONTRACT,
])
def test_enforceability_within_documented_range(text):
    assert 0.5 <= score_legal_enforceability(_tokens(text)).score <= 1.0


def test_risk_from_one_sided_and_problematic_terms():
    result = score_legal_risk(_tokens(
        "Licensor may at its sole discretion impose an unlimited penalty and forfeiture, "
        "and the licence is perpetual and irrevocable"
    ))
    assert result.score > 0.6
    assert result.label == "High Risk"
    assert any("one-sided" in issue for issue in result.details["issues"])


def test_risk_low_for_balanced_clause():
    result = score_legal_risk(_tokens("Each party shall act in good faith"))
    assert result.score == 0.0
    assert result.label == "Low Risk"


def test_completeness_full_contract():
    result = score_legal_completeness(_tokens(FULL_CONTRACT))
    assert result.details["missing"] == []
    assert result.score == pytest.approx(1.0)


def test_completeness_partial():
    result = score_legal_completeness(_tokens("The buyer shall pay the price"))
    assert result.details["present"] == ["parties", "obligations", "consideration"]
    assert result.score == pytest.approx(0.5)
    assert result.label == "Partial"


def test_entities_extracted():
    entities = extract_contract_entities(_tokens(
        "Acme Corp. shall deliver the goods by January 15, 2025 for $1,200.50 to Beta Industries"
    ))
    assert "$1,200.50" in entities["amounts"]
    assert "January 15, 2025" in entities["dates"]
    assert entities["obligations"] == ["shall deliver the goods"]
    assert "Beta Industries" in entities["parties"]


def test_document_type_detection():
    assert detect_document_type(_tokens(
        "The licensee receives a license grant from the licensor"
    )) == "License Agreement"
    assert detect_document_type(_tokens("hello world")) == "General Legal Document"


def test_analyze_legal_shape():
    result = analyze_legal(_tokens(FULL_CONTRACT))
    assert set(result) == {
        "clarity", "enforceability", "risk", "completeness", "entities", "document_type",
    }
    assert 0.0 <= result["clarity"]["score"] <= 1.0
