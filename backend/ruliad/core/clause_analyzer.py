"""Clause Analyzer — the whole pipeline behind one call.

Invariants:
    - analyze() returns a JSON-compatible dict with no cyclic references
    - Identical normalized input + options -> identical result (cache or not)
    - Empty optional sections are None ("multiway", "rewrite", "clause_graph"),
      never missing keys and never errors
    - The cache and logger are injected; the analyzer owns no global state

Design Decisions:
    - Composition over inheritance: the analyzer only sequences pure functions
    - "cached" is the only field that differs between a fresh and a cached result
    - Pipeline duration goes to the log (duration_ms), never into the record
"""

import logging
import time

from ruliad.core.boundary_protocols import AnalysisCache, LoggerLike
from ruliad.core.classify_tokens import classify_tokens
from ruliad.core.clause_structure import build_tone_summary, extract_agent_action_patient
from ruliad.core.dependency_graph import build_clause_dependency_graph
from ruliad.core.domain_types import PillTone
from ruliad.core.equivalence_classes import find_equivalence_classes
from ruliad.core.legal_metrics import analyze_legal
from ruliad.core.multiway_graph import generate_multiway_graph
from ruliad.core.relation_skeleton import build_relation_formula
from ruliad.core.result_cache import make_cache_key
from ruliad.core.ruliad_state import RuliadState, project_state
from ruliad.core.score_metrics import MetricResult, score_all
from ruliad.core.scoring_constants import (
    MULTIWAY_DEFAULT_MAX_DEPTH, EQUIVALENCE_DEFAULT_THRESHOLD, STATUS_PILL_ETHICAL_ALERT,
)
from ruliad.core.tokenize_clause import normalize_clause, tokenize_clause
from ruliad.core.transform_rules import apply_transformation_rules
from ruliad.core.word_diff import diff_words, render_diff_html

_TERMINAL_PUNCTUATION = (".", "!", "?", ";", ":")


def build_status_pill(state: RuliadState, ethical_score: float) -> dict:
    """Summary badge: aligned triad, possible CI issue, or partial alignment."""
    if state.bits == (1, 1, 1):
        return {"text": "Aligned triad (Q+L+K)", "tone": PillTone.OK.value}
    if ethical_score < STATUS_PILL_ETHICAL_ALERT:
        return {"text": "Possible CI issue", "tone": PillTone.BAD.value}
    return {"text": "Partial alignment", "tone": PillTone.WARN.value}


def finish_rewrite(text: str) -> str:
    """Sentence-case the first character and close with punctuation."""
    text = text.strip()
    if not text:
        return text
    text = text[0].upper() + text[1:]
    if not text.endswith(_TERMINAL_PUNCTUATION):
        text += "."
    return text


def build_clause_graph(clauses: list, threshold: float = EQUIVALENCE_DEFAULT_THRESHOLD) -> dict:
    """Dependency graph summary plus equivalence classes for a clause list."""
    graph = build_clause_dependency_graph(clauses)
    cycles = graph.find_cycles()
    return {
        "stats": graph.stats(),
        "has_cycles": bool(cycles),
        "cycles": cycles,
        "topological_order": graph.topological_sort(),
        "dot": graph.to_dot(),
        "edges": graph.edges(),
        "equivalence_classes": find_equivalence_classes(clauses, threshold),
    }


class ClauseAnalyzer:
    """Tokenize, score, project, rewrite and (optionally) graph one clause."""

    def __init__(
        self,
        cache: AnalysisCache | None = None,
        logger: LoggerLike | None = None,
        multiway_max_depth: int = MULTIWAY_DEFAULT_MAX_DEPTH,
        equivalence_threshold: float = EQUIVALENCE_DEFAULT_THRESHOLD,
    ):
        self._cache = cache
        self._logger = logger or logging.getLogger(__name__)
        self._multiway_max_depth = multiway_max_depth
        self._equivalence_threshold = equivalence_threshold

    def analyze(self, text: str, clauses: list | None = None, with_rewrite: bool = False) -> dict:
        normalized = normalize_clause(text)
        key = make_cache_key(normalized, with_rewrite, clauses)

        if self._cache is not None:
            hit = self._cache.get(key)
            if hit is not None:
                self._logger.debug(
                    f"Cache hit for clause ({len(normalized)} chars)",
                    extra={"cache_hit": True, "clause_length": len(normalized)},
                )
                hit["cached"] = True
                return hit

        started = time.perf_counter()
        result = self._run_pipeline(normalized, clauses, with_rewrite)
        duration_ms = round((time.perf_counter() - started) * 1000, 3)
        self._logger.info(
            f"Analyzed clause: state {result['state']['bit_string']}, "
            f"{result['transformations']['candidate_count']} rewrite candidates",
            extra={
                "cache_hit": False,
                "clause_length": len(normalized),
                "state": result["state"]["bit_string"],
                "clause_count": len(clauses) if clauses else 0,
                "duration_ms": duration_ms,
            },
        )

        if self._cache is not None:
            self._cache.set(key, result)
        return result

    def warm(self, texts: list[str], with_rewrite: bool = False) -> int:
        """Analyze and cache each text not cached yet; returns how many were computed."""
        if self._cache is None:
            return 0
        computed = 0
        for text in texts:
            key = make_cache_key(normalize_clause(text), with_rewrite)
            if self._cache.has(key):
                continue
            self.analyze(text, with_rewrite=with_rewrite)
            computed += 1
        return computed

    def _run_pipeline(self, normalized: str, clauses: list | None, with_rewrite: bool) -> dict:
        tokens = classify_tokens(tokenize_clause(normalized))
        metrics: dict[str, MetricResult] = score_all(tokens)

        labels = {name: metrics[name].label for name in ("structural", "logical", "ethical")}
        state = project_state(
            metrics["structural"].score, metrics["logical"].score, metrics["ethical"].score, labels,
        )
        transformations = apply_transformation_rules(tokens)

        multiway = None
        if transformations["candidate_count"]:
            graph = generate_multiway_graph(normalized, self._multiway_max_depth)
            multiway = graph.summary(self._multiway_max_depth)
            multiway["graph"] = graph.to_dict()
            multiway["deepest_path"] = [n.id for n in graph.get_path(graph.nodes[-1].id)]

        rewrite = None
        if with_rewrite:
            rewritten = finish_rewrite(transformations["improved_text"])
            segments = diff_words(normalized, rewritten)
            rewrite = {
                "rewritten": rewritten,
                "diff": [s.to_dict() for s in segments],
                "diff_html": render_diff_html(segments),
            }

        clause_graph = None
        if clauses:
            clause_graph = build_clause_graph(clauses, self._equivalence_threshold)

        return {
            "normalized": normalized,
            "tokens": [t.to_dict() for t in tokens],
            "metrics": {name: m.to_dict() for name, m in metrics.items()},
            "state": state.to_dict(),
            "relation_formula": build_relation_formula(tokens).to_dict(),
            "tone_summary": build_tone_summary(tokens),
            "agent_action_patient": extract_agent_action_patient(tokens).to_dict(),
            "legal": analyze_legal(tokens),
            "status_pill": build_status_pill(state, metrics["ethical"].score),
            "rewrite": rewrite,
            "transformations": transformations,
            "multiway": multiway,
            "clause_graph": clause_graph,
            "cached": False,
        }
