"""Analysis Service — settings-aware wrapper around ClauseAnalyzer.

Invariants:
    - One ResultCache per process (get_result_cache is lru_cached)
    - Settings limits (max_clause_length, max_clauses) are enforced here, on top
      of the static schema limits, and surface as ClauseValidationError (400)
    - Clause lists reach the core as plain dicts

Design Decisions:
    - FastAPI Depends providers so tests swap the cache via app.dependency_overrides
"""

import logging
from functools import lru_cache

from fastapi import Depends

from ruliad.config import Settings, get_settings
from ruliad.core.clause_analyzer import ClauseAnalyzer, build_clause_graph
from ruliad.core.errors import ClauseValidationError
from ruliad.core.result_cache import ResultCache
from ruliad.core.word_diff import (
    diff_words, render_diff_html, reconstruct_original, reconstruct_revised,
)
from ruliad.schemas.analysis import (
    AnalyzeRequest, ClauseGraphRequest, ClauseInput, DiffRequest,
)

logger = logging.getLogger(__name__)


@lru_cache
def get_result_cache() -> ResultCache:
    return ResultCache(get_settings().cache_max_size)


class AnalysisService:
    """Request-level operations: analyze, clause graph, diff, cache admin."""

    def __init__(self, cache: ResultCache, settings: Settings):
        self._cache = cache
        self._settings = settings
        self._analyzer = ClauseAnalyzer(
            cache=cache,
            logger=logging.getLogger("ruliad.core.clause_analyzer"),
            multiway_max_depth=settings.multiway_max_depth,
            equivalence_threshold=settings.equivalence_threshold,
        )

    def analyze(self, request: AnalyzeRequest) -> dict:
        self._check_clause_length(request.clause, "clause")
        clauses = self._clause_dicts(request.clauses) if request.clauses else None
        return self._analyzer.analyze(
            request.clause, clauses=clauses, with_rewrite=request.with_rewrite,
        )

    def clause_graph(self, request: ClauseGraphRequest) -> dict:
        clauses = self._clause_dicts(request.clauses)
        threshold = (
            request.threshold if request.threshold is not None
            else self._settings.equivalence_threshold
        )
        result = build_clause_graph(clauses, threshold)
        logger.info(
            f"Built clause graph: {result['stats']['vertices']} clauses, "
            f"{result['stats']['edges']} dependencies",
            extra={"clause_count": len(clauses)},
        )
        return result

    def diff(self, request: DiffRequest) -> dict:
        segments = diff_words(request.original, request.revised)
        return {
            "segments": [s.to_dict() for s in segments],
            "html": render_diff_html(segments),
            "original": reconstruct_original(segments),
            "revised": reconstruct_revised(segments),
            "changed": any(s.kind.value != "equal" for s in segments),
        }

    def cache_stats(self) -> dict:
        return self._cache.stats()

    def clear_cache(self) -> dict:
        self._cache.clear()
        logger.info("Result cache cleared")
        return self._cache.stats()

    def _check_clause_length(self, text: str, field: str) -> None:
        limit = self._settings.max_clause_length
        if len(text) > limit:
            raise ClauseValidationError(
                f"{field} exceeds {limit} characters ({len(text)})", field,
            )

    def _clause_dicts(self, clauses: list[ClauseInput]) -> list[dict]:
        if len(clauses) > self._settings.max_clauses:
            raise ClauseValidationError(
                f"at most {self._settings.max_clauses} clauses per request "
                f"({len(clauses)} given)",
                "clauses",
            )
        for clause in clauses:
            self._check_clause_length(clause.text, f"clauses[{clause.id}].text")
        return [c.model_dump() for c in clauses]


def get_analysis_service(
    cache: ResultCache = Depends(get_result_cache),
    settings: Settings = Depends(get_settings),
) -> AnalysisService:
    return AnalysisService(cache, settings)
