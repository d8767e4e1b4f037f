"""State Projector tests — three scores thresholded into one of 8 states.

Tests cover:
    - scores_to_bits examples (all high -> 111, all low -> 000)
    - Threshold is inclusive at 0.6
    - Bit/threshold correspondence over a score grid
    - Every bit pattern has a title, description and distinct sentence
    - Explanation lists positive dimensions and appends metric labels
    - RuliadState.to_dict shape
"""

import itertools

import pytest

from ruliad.core.ruliad_state import (
    RULIAD_STATES, explain_bits, project_state, scores_to_bits,
)


def test_high_scores_map_to_full_alignment():
    assert scores_to_bits(0.8, 0.7, 0.9) == (1, 1, 1)


def test_low_scores_map_to_incoherent():
    assert scores_to_bits(0.3, 0.2, 0.4) == (0, 0, 0)


def test_threshold_is_inclusive():
    assert scores_to_bits(0.6, 0.59999, 0.6) == (1, 0, 1)


@pytest.mark.parametrize("q,l,k", itertools.product([0.0, 0.3, 0.6, 0.61, 1.0], repeat=3))
def test_bits_follow_threshold(q, l, k):
    assert scores_to_bits(q, l, k) == (int(q >= 0.6), int(l >= 0.6), int(k >= 0.6))


def test_all_eight_states_are_named_and_explained():
    patterns = list(itertools.product([0, 1], repeat=3))
    assert set(RULIAD_STATES) == set(patterns)
    sentences = {explain_bits(bits) for bits in patterns}
    assert len(sentences) == 8


def test_all_zero_explanation():
    text = explain_bits((0, 0, 0))
    assert "does not register" in text
    assert "positively classified" not in text


def test_all_one_explanation_mentions_highest_alignment():
    text = explain_bits((1, 1, 1))
    assert "highest" in text
    assert "alignment" in text
    assert text.startswith("The clause is positively classified on syntax/structure (QSG)")


def test_explanation_lists_only_positive_dimensions():
    text = explain_bits((1, 0, 1))
    assert "syntax/structure (QSG)" in text
    assert "Kantian alignment (CI heuristic)" in text
    assert "logical coherence (FOL-ish)," not in text


def test_labels_are_appended():
    text = explain_bits((0, 1, 0), {"structural": "S", "logical": "L", "ethical": "E"})
    assert text.endswith("QSG: S. Logic: L. Kant CI: E.")


def test_project_state_to_dict():
    state = project_state(0.9, 0.4, 0.7)
    data = state.to_dict()
    assert data["bits"] == {"q": 1, "l": 0, "k": 1}
    assert data["bit_string"] == "101"
    assert data["title"] == "QSG + Moral"
    assert data["description"] == RULIAD_STATES[(1, 0, 1)][1]
    assert data["explanation"] == state.explanation
