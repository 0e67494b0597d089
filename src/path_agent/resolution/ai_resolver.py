"""
AI-backed resolution with a hard deadline, verification and caching.

Only paths that exist on disk are ever cached or returned; a slow or broken
backend costs at most one timeout and never raises to the caller.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..caching import TTLCache
from ..dialects import DialectTranslator
from ..exceptions import (
    InferenceError,
    MalformedInferenceResponseError,
    ResolutionErrorCode,
)
from ..inference.backend import InferenceBackend
from ..inference.response_parser import parse_path_list
from ..locations import KnownLocations
from ..metrics import PerformanceMetrics
from ..models import CandidatePath, Query
from .path_verifier import PathVerifier
from .stage import ResolutionStage, StageResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AIResolution:
    """
    Outcome of one AI resolution attempt.
    
    Attributes:
        candidates: Verified paths (empty on any failure)
        diagnostics: Error codes explaining an empty result
        from_cache: True when served from the AI cache without a backend call
    """
    candidates: Tuple[CandidatePath, ...] = ()
    diagnostics: Tuple[ResolutionErrorCode, ...] = ()
    from_cache: bool = False


class AIBackedResolver:
    """
    Cache -> backend (under deadline) -> parse -> verify -> cache.
    
    Usage:
        resolver = AIBackedResolver(backend, verifier, ai_cache, locations, translator)
        outcome = await resolver.resolve(Query("게임 폴더"))
    """
    
    def __init__(
        self,
        backend: InferenceBackend,
        verifier: PathVerifier,
        ai_cache: TTLCache,
        locations: KnownLocations,
        translator: DialectTranslator,
        timeout: float = 12.0,
        metrics: Optional[PerformanceMetrics] = None,
    ):
        """
        :param backend: Inference backend to consult on cache misses
        :param verifier: Existence checker for returned paths
        :param ai_cache: Cache of verified results keyed by normalized query
        :param locations: Base directories described to the backend
        :param translator: Used to tag returned paths with their dialect
        :param timeout: Deadline for one backend call, in seconds
        :param metrics: Optional counters to update
        """
        self._backend = backend
        self._verifier = verifier
        self._cache = ai_cache
        self._locations = locations
        self._translator = translator
        self.timeout = timeout
        self._metrics = metrics
    
    async def resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> AIResolution:
        """
        Resolve a query through the AI cache or the inference backend.
        
        :param query: Query to resolve
        :param context: Optional hints; a ``known_dirs`` mapping is forwarded to the backend
        :return: AIResolution; never raises for backend failures
        """
        key = query.normalized
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"AI cache hit for '{key}'")
            self._count("ai_cache_hits")
            return AIResolution(candidates=tuple(cached), from_cache=True)
        
        known_dirs = self._known_dirs(context)
        self._count("ai_requests")
        
        try:
            raw = await asyncio.wait_for(
                self._backend.ainfer(query.raw, known_dirs),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Inference timed out after {self.timeout}s for '{query.raw}'")
            self._count("ai_timeouts")
            return self._failure(ResolutionErrorCode.AI_TIMEOUT)
        except InferenceError as e:
            logger.warning(f"Inference failed for '{query.raw}': {e}")
            self._count("ai_timeouts" if e.code is ResolutionErrorCode.AI_TIMEOUT else "ai_failures")
            return self._failure(e.code)
        
        try:
            paths = parse_path_list(raw)
        except MalformedInferenceResponseError as e:
            logger.warning(f"Discarding malformed inference reply: {e}")
            self._count("ai_failures")
            return self._failure(ResolutionErrorCode.AI_MALFORMED_RESPONSE)
        
        if not paths:
            return self._failure(ResolutionErrorCode.NO_CANDIDATES)
        
        candidates = []
        for path in dict.fromkeys(paths):
            candidates.append(CandidatePath(path, self._translator.dialect_of(path)))
        
        verified = await self._verifier.verify(candidates)
        if not verified:
            logger.info(f"None of {len(candidates)} inferred path(s) exist for '{query.raw}'")
            self._count("ai_failures")
            return self._failure(ResolutionErrorCode.VERIFY_FAILED_ALL)
        
        self._cache.put(key, tuple(verified))
        self._count("ai_inferences")
        logger.info(f"Inference resolved '{query.raw}' to {len(verified)} verified path(s)")
        return AIResolution(candidates=tuple(verified))
    
    def _known_dirs(self, context: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        known_dirs = dict(self._locations.labelled_dirs())
        if context and isinstance(context.get("known_dirs"), Mapping):
            known_dirs.update({str(k): str(v) for k, v in context["known_dirs"].items()})
        return known_dirs
    
    def _count(self, counter: str) -> None:
        if self._metrics:
            self._metrics.increment(counter)
    
    @staticmethod
    def _failure(code: ResolutionErrorCode) -> AIResolution:
        return AIResolution(diagnostics=(code,))


class AIResolutionStage(ResolutionStage):
    """Pipeline stage consulting the AI cache, then the inference backend."""
    
    name = "ai_inference"
    cache_name = "ai_cache"
    confidence = 0.6
    
    def __init__(self, resolver: AIBackedResolver):
        self._resolver = resolver
    
    async def try_resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> StageResult:
        outcome = await self._resolver.resolve(query, context)
        return StageResult.of(
            self.cache_name if outcome.from_cache else self.name,
            outcome.candidates,
            self.confidence,
            outcome.diagnostics,
        )
