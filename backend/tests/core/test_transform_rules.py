"""Transformation Engine tests — rule table, candidates, improved text, metrics.

Tests cover:
    - Rule table: 20 rules, all three categories, confidences in (0, 1]
    - Candidates recorded in rule order with token positions
    - Improved text replaces the first word-boundary occurrence per match
    - Repeated matches replace successive occurrences
    - Multi-word patterns match over token windows
    - Substring match records a candidate but never rewrites inside a word
    - Bracketed placeholders inserted literally
    - No match -> empty candidates, unchanged text, zeroed metrics
"""

import pytest

from ruliad.core.classify_tokens import classify_tokens
from ruliad.core.domain_types import RewriteCategory
from ruliad.core.tokenize_clause import tokenize_clause
from ruliad.core.transform_rules import (
    TRANSFORMATION_RULES, apply_rule_once, apply_transformation_rules,
)


def _apply(text: str) -> dict:
    return apply_transformation_rules(classify_tokens(tokenize_clause(text)))


def test_rule_table_shape():
    assert len(TRANSFORMATION_RULES) == 20
    assert {r.category for r in TRANSFORMATION_RULES} == set(RewriteCategory)
    assert all(0.0 < r.confidence <= 1.0 for r in TRANSFORMATION_RULES)


def test_rule_label_format():
    assert TRANSFORMATION_RULES[0].label == "precision: may → shall"


def test_candidates_and_improved_text():
    result = _apply("The vendor may use reasonable efforts")
    assert [c["source_pattern"] for c in result["candidates"]] == ["may", "reasonable"]
    assert [c["token_index"] for c in result["candidates"]] == [2, 4]
    assert result["candidates"][0]["suggested"] == "shall"
    assert result["improved_text"] == "The vendor shall use mutually agreed upon efforts"
    assert result["candidate_count"] == 2


def test_category_metrics():
    result = _apply("The vendor may use reasonable efforts")
    precision = result["metrics"]["precision"]
    assert precision["count"] == 2
    assert precision["avg_confidence"] == pytest.approx(0.8)
    assert precision["total_impact"] == pytest.approx(1.6)
    assert result["metrics"]["risk-reduction"] == {
        "count": 0, "avg_confidence": 0.0, "total_impact": 0.0,
    }


def test_repeated_matches_replace_successive_occurrences():
    result = _apply("Buyer may or may not renew")
    assert result["candidate_count"] == 2
    assert result["improved_text"] == "Buyer shall or shall not renew"


def test_multi_word_pattern():
    result = _apply("Licensor acts at its sole discretion.")
    cand = result["candidates"][0]
    assert cand["original"] == "sole discretion"
    assert cand["category"] == "risk-reduction"
    assert cand["token_index"] == 4
    assert result["improved_text"] == "Licensor acts at its reasonable discretion."


def test_substring_match_does_not_rewrite_inside_words():
    result = _apply("The mayor signs")
    assert result["candidate_count"] == 1
    assert result["candidates"][0]["original"] == "mayor"
    assert result["improved_text"] == "The mayor signs"


def test_case_insensitive_with_literal_placeholders():
    result = _apply("Fees are APPROXIMATELY 10 percent")
    assert result["improved_text"] == "Fees are within [±X%] 10 percent"


def test_no_match_leaves_text_unchanged():
    result = _apply("The sky is blue")
    assert result["candidates"] == []
    assert result["improved_text"] == "The sky is blue"
    assert all(m["count"] == 0 for m in result["metrics"].values())


def test_apply_rule_once_only_first_occurrence():
    rule = TRANSFORMATION_RULES[0]
    assert apply_rule_once(rule, "may may") == "shall may"
