"""Tokenizer tests — normalization and positioned tokens.

Tests cover:
    - Whitespace runs collapse and edges trim
    - normalize_clause is idempotent
    - "the council protects" -> 3 tokens with expected lower_text
    - Edge punctuation stripped into clean_text, raw_text kept
    - Punctuation-only chunk yields empty clean_text
    - Empty / whitespace-only input -> []
    - Non-str input is a contract violation
    - find_phrases matches single and multi-word phrases in order
"""

import pytest

from ruliad.core.errors import ContractViolationError
from ruliad.core.tokenize_clause import (
    clause_text, find_phrases, normalize_clause, tokenize_clause,
)


def test_normalize_collapses_whitespace_and_trims():
    assert normalize_clause("  the \t council\n\nprotects  ") == "the council protects"


def test_normalize_is_idempotent():
    once = normalize_clause("a   b \n c")
    assert normalize_clause(once) == once


def test_council_example_yields_three_tokens():
    tokens = tokenize_clause("the council protects")
    assert len(tokens) == 3
    assert [t.lower_text for t in tokens] == ["the", "council", "protects"]
    assert [t.index for t in tokens] == [0, 1, 2]


def test_edge_punctuation_stripped_into_clean_text():
    tokens = tokenize_clause('"Vendor," shall (a) pay.')
    assert tokens[0].raw_text == '"Vendor,"'
    assert tokens[0].clean_text == "Vendor"
    assert tokens[0].lower_text == "vendor"
    assert tokens[2].clean_text == "a"
    assert tokens[3].clean_text == "pay"


def test_inner_punctuation_is_kept():
    tokens = tokenize_clause("non-compete e.g. 3.5")
    assert [t.clean_text for t in tokens] == ["non-compete", "e.g", "3.5"]


def test_punctuation_only_chunk_has_empty_clean_text():
    tokens = tokenize_clause("protect — people")
    assert tokens[1].raw_text == "—"
    assert tokens[1].clean_text == ""


def test_empty_input_yields_no_tokens():
    assert tokenize_clause("") == []
    assert tokenize_clause("   \n\t ") == []


def test_non_string_input_is_contract_violation():
    with pytest.raises(ContractViolationError) as exc:
        normalize_clause(None)
    assert exc.value.code == "CONTRACT_VIOLATION"
    assert exc.value.http_status == 500


def test_clause_text_rebuilds_normalized_text():
    text = "The  Vendor   shall deliver."
    assert clause_text(tokenize_clause(text)) == "The Vendor shall deliver."


def test_find_phrases_single_and_multi_word():
    tokens = tokenize_clause("Use reasonable efforts as needed, as needed.")
    hits = find_phrases(tokens, frozenset({"reasonable", "as needed"}))
    assert hits == [(1, "reasonable"), (3, "as needed"), (5, "as needed")]


def test_token_role_follows_tag():
    token = tokenize_clause("council")[0]
    assert token.role == "content"
    assert token.to_dict()["tag"] == "WORD"
