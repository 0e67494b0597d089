"""
Resolution orchestrator.

Walks an ordered list of stages and returns the first non-empty answer,
falling back to the query text itself. Never raises for resolution failures.
"""
import logging
import time
from typing import Any, List, Mapping, Optional, Sequence

from ..exceptions import ResolutionErrorCode
from ..learning.user_pattern_learner import UserPatternLearner
from ..metrics import PerformanceMetrics
from ..models import CandidatePath, Query
from ..resolution.resolution_metadata import ResolutionResult
from ..resolution.stage import ResolutionStage, StageResult

logger = logging.getLogger(__name__)

IDENTITY_METHOD = "identity"


def deduplicate(candidates: Sequence[CandidatePath]) -> List[CandidatePath]:
    """Drop repeated paths, keeping the first occurrence of each."""
    seen = set()
    unique = []
    for candidate in candidates:
        if candidate.path in seen:
            continue
        seen.add(candidate.path)
        unique.append(candidate)
    return unique


class ResolutionOrchestrator:
    """
    Runs the resolution pipeline for one query at a time.
    
    Responsibilities:
    - Record the query with the learner
    - Try stages in order; the first with candidates wins (no retries)
    - De-duplicate the winning candidates, preserving order
    - Fall back to the raw query when every stage comes up empty
    - Update metrics and collect diagnostics
    
    Stages run sequentially; a stage that raises unexpectedly is logged and
    treated as having found nothing.
    """
    
    def __init__(
        self,
        stages: Sequence[ResolutionStage],
        learner: Optional[UserPatternLearner] = None,
        metrics: Optional[PerformanceMetrics] = None,
    ):
        """
        :param stages: Stages to try, in order
        :param learner: Optional usage-history learner
        :param metrics: Optional counters to update
        """
        self._stages = list(stages)
        self._learner = learner
        self._metrics = metrics
    
    @property
    def stages(self) -> List[ResolutionStage]:
        return list(self._stages)
    
    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self._stages]
    
    async def resolve(
        self,
        query: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> ResolutionResult:
        """
        Resolve a natural-language query to candidate paths.
        
        :param query: Raw user query
        :param context: Optional caller-supplied hints
        :return: ResolutionResult with at least one candidate
        """
        start = time.perf_counter()
        parsed = Query(query)
        
        if self._learner:
            self._learner.record(parsed.raw)
        
        diagnostics: List[ResolutionErrorCode] = []
        winner: Optional[StageResult] = None
        
        for stage in self._stages:
            result = await self._run_stage(stage, parsed, context)
            diagnostics.extend(result.diagnostics)
            if result.found:
                winner = result
                break
        
        if winner is not None:
            candidates = deduplicate(winner.candidates)
            method, confidence = winner.stage, winner.confidence
        else:
            candidates = [CandidatePath(query)]
            method, confidence = IDENTITY_METHOD, 0.0
            logger.info(f"No stage resolved '{query}'; returning it unchanged")
        
        elapsed_ms = (time.perf_counter() - start) * 1000
        if self._metrics:
            self._metrics.record_resolution(method, elapsed_ms)
        
        suggestions = self._learner.suggest_for(parsed.raw) if self._learner else []
        logger.debug(
            f"Resolved '{query}' via {method} -> {len(candidates)} path(s) in {elapsed_ms:.1f}ms"
        )
        
        return ResolutionResult(
            query=query,
            candidates=tuple(candidates),
            method=method,
            confidence=confidence,
            elapsed_ms=elapsed_ms,
            diagnostics=tuple(diagnostics),
            suggestions=tuple(suggestions),
        )
    
    async def _run_stage(
        self,
        stage: ResolutionStage,
        query: Query,
        context: Optional[Mapping[str, Any]],
    ) -> StageResult:
        try:
            return await stage.try_resolve(query, context)
        except Exception:
            logger.exception(f"Stage {stage.name} failed for '{query.raw}'")
            return StageResult(stage=stage.name)
