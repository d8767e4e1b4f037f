"""Analysis Routes — clause analysis, clause graphs, diffs and cache admin.

Invariants:
    - Request bodies are validated by Pydantic before reaching a handler
    - Handlers only delegate to AnalysisService
"""

import logging

from fastapi import APIRouter, Depends, status

from ruliad.schemas.analysis import AnalyzeRequest, ClauseGraphRequest, DiffRequest
from ruliad.services.analysis_service import AnalysisService, get_analysis_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/analysis", tags=["analysis"])


@router.post("", status_code=status.HTTP_200_OK)
async def analyze_clause(
    body: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Full pipeline result for one clause."""
    return service.analyze(body)


@router.post("/diff")
async def diff_texts(
    body: DiffRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Word-level edit script between two texts."""
    return service.diff(body)


@router.post("/clause-graph")
async def clause_graph(
    body: ClauseGraphRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Dependency graph summary plus equivalence classes."""
    return service.clause_graph(body)


@router.get("/cache")
async def cache_stats(service: AnalysisService = Depends(get_analysis_service)):
    return service.cache_stats()


@router.delete("/cache")
async def clear_cache(service: AnalysisService = Depends(get_analysis_service)):
    return service.clear_cache()
