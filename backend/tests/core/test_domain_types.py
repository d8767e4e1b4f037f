"""Domain types — enums serialize as plain strings, NewTypes annotate the core records.

Tests cover:
    - str Enums compare equal to their wire values
    - StateId / Score / Confidence are the declared field types of the records that carry them
"""

from typing import get_type_hints

from ruliad.core.domain_types import Confidence, DependencyKind, Score, StateId, TokenTag
from ruliad.core.multiway_graph import MultiwayNode
from ruliad.core.score_metrics import MetricResult
from ruliad.core.transform_rules import TransformationCandidate


def test_enums_are_wire_strings():
    assert DependencyKind.DEFINITION == "definition"
    assert TokenTag.VERB.value == "VERB"


def test_records_use_domain_newtypes():
    assert get_type_hints(MultiwayNode)["id"] is StateId
    assert get_type_hints(MetricResult)["score"] is Score
    assert get_type_hints(TransformationCandidate)["confidence"] is Confidence
