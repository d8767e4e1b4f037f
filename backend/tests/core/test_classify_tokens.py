"""Classifier tests — one deterministic tag per token.

Tests cover:
    - Each tag reachable from its lexicon or pattern
    - Priority: "without" is NEG (also a preposition), "no" is NEG (also a quantifier)
    - "shall" is VERB even though it is a modal
    - Unknown words default to WORD
    - Tag totality and determinism over a mixed clause
    - Classification does not mutate input tokens
"""

import pytest

from ruliad.core.classify_tokens import classify_tokens, classify_word
from ruliad.core.domain_types import TokenTag
from ruliad.core.tokenize_clause import tokenize_clause


@pytest.mark.parametrize("word,tag", [
    ("not", TokenTag.NEG),
    ("of", TokenTag.PREP),
    ("protects", TokenTag.VERB),
    ("every", TokenTag.QUANT),
    ("the", TokenTag.DET),
    ("or", TokenTag.CONJ),
    ("2024", TokenTag.NUM),
    ("council", TokenTag.WORD),
])
def test_each_tag_is_reachable(word, tag):
    assert classify_word(word) == tag


def test_negation_outranks_preposition_and_quantifier():
    assert classify_word("without") == TokenTag.NEG
    assert classify_word("no") == TokenTag.NEG
    assert classify_word("none") == TokenTag.NEG


def test_modal_shall_is_a_verb():
    assert classify_word("shall") == TokenTag.VERB


def test_partial_numerals_are_words():
    assert classify_word("3.5") == TokenTag.WORD
    assert classify_word("") == TokenTag.WORD


def test_every_token_gets_exactly_one_tag_deterministically():
    text = "No person shall use any worker as a means without consent, 3 times over."
    first = classify_tokens(tokenize_clause(text))
    second = classify_tokens(tokenize_clause(text))
    assert len(first) == len(tokenize_clause(text))
    assert all(isinstance(t.tag, TokenTag) for t in first)
    assert [t.tag for t in first] == [t.tag for t in second]


def test_classification_returns_new_tokens():
    raw = tokenize_clause("the council protects")
    classified = classify_tokens(raw)
    assert all(t.tag == TokenTag.WORD for t in raw)
    assert [t.tag for t in classified] == [TokenTag.DET, TokenTag.WORD, TokenTag.VERB]
