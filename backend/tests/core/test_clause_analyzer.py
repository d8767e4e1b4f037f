"""Clause Analyzer tests — full pipeline record, caching, optional sections.

Tests cover:
    - Result record carries every section and is JSON-serializable
    - Bits agree with the three metric scores
    - Optional sections are None when not requested / not applicable
    - Rewrite section: sentence-cased text, diff segments, HTML
    - Multiway summary, graph export and deepest path present when rules match
    - warm() computes only texts not cached yet
    - Clause graph section for a clause list
    - Status pill tones (ok / warn / bad)
    - Injected cache: second call is a hit, whitespace variants share an entry
    - Injected logger receives structured extras
"""

import json

from ruliad.core.clause_analyzer import ClauseAnalyzer, build_status_pill, finish_rewrite
from ruliad.core.result_cache import ResultCache
from ruliad.core.ruliad_state import project_state


class _RecordingLogger:
    def __init__(self):
        self.records = []

    def debug(self, msg, *args, **kwargs):
        self.records.append(("debug", msg, kwargs.get("extra", {})))

    def info(self, msg, *args, **kwargs):
        self.records.append(("info", msg, kwargs.get("extra", {})))

    def warning(self, msg, *args, **kwargs):
        self.records.append(("warning", msg, kwargs.get("extra", {})))


EXPECTED_KEYS = {
    "normalized", "tokens", "metrics", "state", "relation_formula", "tone_summary",
    "agent_action_patient", "legal", "status_pill", "rewrite", "transformations",
    "multiway", "clause_graph", "cached",
}


def test_result_record_shape_and_json():
    result = ClauseAnalyzer().analyze("  The council   protects the land ")
    assert set(result) == EXPECTED_KEYS
    assert result["normalized"] == "The council protects the land"
    assert len(result["tokens"]) == 5
    assert set(result["metrics"]) == {"structural", "logical", "ethical", "ambiguity", "modal_profile"}
    json.dumps(result)


def test_bits_follow_metric_scores():
    result = ClauseAnalyzer().analyze("The council protects the rights of every citizen")
    metrics = result["metrics"]
    bits = result["state"]["bits"]
    assert bits["q"] == int(metrics["structural"]["score"] >= 0.6)
    assert bits["l"] == int(metrics["logical"]["score"] >= 0.6)
    assert bits["k"] == int(metrics["ethical"]["score"] >= 0.6)
    assert result["state"]["bit_string"] == "111"
    assert result["status_pill"]["tone"] == "ok"


def test_optional_sections_absent_without_matches():
    result = ClauseAnalyzer().analyze("The sky is blue")
    assert result["rewrite"] is None
    assert result["multiway"] is None
    assert result["clause_graph"] is None
    assert result["transformations"]["candidates"] == []


def test_rewrite_section():
    result = ClauseAnalyzer().analyze("the vendor may use reasonable efforts", with_rewrite=True)
    rewrite = result["rewrite"]
    assert rewrite["rewritten"] == "The vendor shall use mutually agreed upon efforts."
    assert {"kind": "delete", "text": "may"} in rewrite["diff"]
    assert '<ins class="diff-ins">shall</ins>' in rewrite["diff_html"]


def test_multiway_summary_when_rules_match():
    result = ClauseAnalyzer(multiway_max_depth=1).analyze("The party may terminate")
    multiway = result["multiway"]
    assert {k: v for k, v in multiway.items() if k not in ("graph", "deepest_path")} == {
        "state_count": 2,
        "terminal_states": ["state_1"],
        "terminal_count": 1,
        "max_depth": 1,
        "depth_reached": 1,
    }
    assert [n["text"] for n in multiway["graph"]["nodes"]] == [
        "The party may terminate", "The party shall terminate",
    ]
    assert multiway["graph"]["edges"] == [
        {"from": "state_0", "to": "state_1", "rule": "precision: may → shall"},
    ]
    assert multiway["deepest_path"] == ["state_0", "state_1"]


def test_clause_graph_section():
    clauses = [
        {"id": "a", "text": "See Section 2.", "section_number": "1"},
        {"id": "b", "text": "Payment terms.", "section_number": "2"},
    ]
    result = ClauseAnalyzer().analyze("See Section 2.", clauses=clauses)
    graph = result["clause_graph"]
    assert graph["has_cycles"] is False
    assert graph["topological_order"] == ["a", "b"]
    assert graph["edges"] == [{"from": "a", "to": "b", "kind": "cross-reference"}]
    assert graph["equivalence_classes"] == [["a"], ["b"]]
    assert graph["dot"].startswith("digraph ClauseDependencies {")


def test_status_pill_tones():
    assert build_status_pill(project_state(0.5, 0.4, 0.6), 0.6)["tone"] == "warn"
    assert build_status_pill(project_state(0.9, 0.9, 0.3), 0.3)["tone"] == "bad"
    assert build_status_pill(project_state(0.9, 0.9, 0.9), 0.9) == {
        "text": "Aligned triad (Q+L+K)", "tone": "ok",
    }


def test_finish_rewrite():
    assert finish_rewrite("the party shall pay") == "The party shall pay."
    assert finish_rewrite("Pay now!") == "Pay now!"
    assert finish_rewrite("") == ""


def test_cache_hit_on_second_call():
    cache = ResultCache(10)
    analyzer = ClauseAnalyzer(cache=cache, logger=_RecordingLogger())
    first = analyzer.analyze("The council protects the land")
    second = analyzer.analyze("The  council protects   the land")
    assert first["cached"] is False
    assert second["cached"] is True
    assert {k: v for k, v in second.items() if k != "cached"} == {
        k: v for k, v in first.items() if k != "cached"
    }
    assert cache.stats()["hits"] == 1
    assert cache.stats()["misses"] == 1


def test_rewrite_option_is_part_of_the_cache_key():
    cache = ResultCache(10)
    analyzer = ClauseAnalyzer(cache=cache)
    analyzer.analyze("the vendor may pay")
    result = analyzer.analyze("the vendor may pay", with_rewrite=True)
    assert result["cached"] is False
    assert result["rewrite"] is not None


def test_logger_receives_structured_extras():
    logger = _RecordingLogger()
    analyzer = ClauseAnalyzer(cache=ResultCache(5), logger=logger)
    analyzer.analyze("The council protects the land")
    analyzer.analyze("The council protects the land")

    level, _, extra = logger.records[0]
    assert level == "info"
    assert extra["cache_hit"] is False
    assert extra["state"] == "001"
    assert extra["clause_length"] == len("The council protects the land")
    assert extra["duration_ms"] >= 0
    assert logger.records[1][0] == "debug"
    assert logger.records[1][2]["cache_hit"] is True


def test_warm_analyzes_only_uncached_texts():
    cache = ResultCache(10)
    analyzer = ClauseAnalyzer(cache=cache)
    first = analyzer.analyze("The party may terminate")

    computed = analyzer.warm(["The party  may terminate", "The council protects the land"])

    assert computed == 1
    assert cache.size() == 2
    again = analyzer.analyze("The party may terminate")
    assert again["cached"] is True
    assert again["normalized"] == first["normalized"]


def test_warm_without_cache_is_a_no_op():
    assert ClauseAnalyzer().warm(["The party may terminate"]) == 0
