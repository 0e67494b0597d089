import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from .config import PathAgentConfig
from .exceptions import AppNotInitializedError
from .metrics import MetricsSnapshot
from .orchestration.resolution_orchestrator import ResolutionOrchestrator
from .resolution.resolution_metadata import ResolutionResult
from .state import ResolverState

logger = logging.getLogger(__name__)


class PathResolutionService:
    """
    Facade over the path resolution subsystem.
    The ONLY entry point for callers that need paths.
    """

    def __init__(self, config: PathAgentConfig, state: Optional[ResolverState] = None):
        """
        Composition root for shared state.
        The orchestrator is injected later via set_orchestrator().
        """
        self.config = config
        self.state = state or ResolverState.from_config(config)

        self._orchestrator: Optional[ResolutionOrchestrator] = None

    # ----------------------------
    # Query handling
    # ----------------------------
    async def aresolve(
        self,
        query: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> List[str]:
        """
        Resolve a natural-language query to an ordered, non-empty list of paths.

        Resolution failures never raise; in the worst case the query itself
        is returned as the only element.
        """
        orchestrator = self._require_orchestrator()
        try:
            result = await orchestrator.resolve(query, context)
        except Exception:
            logger.exception(f"Resolution pipeline failed for '{query}'")
            return [query]
        return result.paths

    def resolve(
        self,
        query: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> List[str]:
        """Synchronous variant of aresolve(). Must not be called from a running event loop."""
        return asyncio.run(self.aresolve(query, context))

    async def aresolve_detailed(
        self,
        query: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> ResolutionResult:
        """Resolve and return the full ResolutionResult (method, confidence, diagnostics)."""
        return await self._require_orchestrator().resolve(query, context)

    def resolve_detailed(
        self,
        query: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> ResolutionResult:
        return asyncio.run(self.aresolve_detailed(query, context))

    # ----------------------------
    # Feedback & diagnostics
    # ----------------------------
    def report_usage(self, path: str) -> None:
        """Tell the learner which path the caller actually used."""
        self.state.learner.record_path_usage(path)

    def metrics_snapshot(self) -> MetricsSnapshot:
        return self.state.metrics.snapshot()

    def performance_report(self) -> Dict[str, Any]:
        return self.state.performance_report()

    def reset_learning(self) -> None:
        """Forget usage history and counters, and empty every cache."""
        self.state.learner.reset()
        self.state.metrics.reset()
        self.state.clear_caches()

    # ----------------------------
    # Dependency injection setters
    # ----------------------------
    def set_orchestrator(self, orchestrator: ResolutionOrchestrator) -> None:
        """Inject the resolution pipeline."""
        self._orchestrator = orchestrator

    def _require_orchestrator(self) -> ResolutionOrchestrator:
        if self._orchestrator is None:
            raise AppNotInitializedError("Resolution pipeline is not initialized.")
        return self._orchestrator
