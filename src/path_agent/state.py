"""
All mutable state shared by the queries of one service instance.

Holding it in one object (instead of module globals) lets tests build an
isolated resolver and lets several resolvers coexist in one process.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from .caching import TTLCache
from .config import PathAgentConfig
from .learning.user_pattern_learner import UserPatternLearner
from .metrics import PerformanceMetrics, optimization_suggestions
from .resolution.fuzzy_matcher import FuzzyMatcher


@dataclass
class ResolverState:
    """
    Caches, learner and metrics for one resolver.
    
    Attributes:
        ai_cache: Verified AI results keyed by normalized query
        scan_cache: Per-(base directory, query) folder scan results
        discovery_cache: Non-empty discovery results keyed by normalized query
        learner: Usage-history learner
        metrics: Performance counters
    """
    ai_cache: TTLCache
    scan_cache: TTLCache
    discovery_cache: TTLCache
    learner: UserPatternLearner
    metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    
    @classmethod
    def from_config(
        cls,
        config: PathAgentConfig,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> "ResolverState":
        """
        Build fresh, empty state.
        
        :param config: PathAgentConfig with TTLs and learner limits
        :param clock: Monotonic clock for cache expiry
        :param wall_clock: Wall clock for the learner's recency window
        :return: ResolverState instance
        """
        return cls(
            ai_cache=TTLCache(
                config.ai_cache_ttl_seconds, config.cache_max_entries, clock, name="ai_cache"
            ),
            scan_cache=TTLCache(
                config.scan_cache_ttl_seconds, config.cache_max_entries, clock, name="scan_cache"
            ),
            discovery_cache=TTLCache(
                config.scan_cache_ttl_seconds, config.cache_max_entries, clock,
                name="discovery_cache",
            ),
            learner=UserPatternLearner(
                fuzzy_matcher=FuzzyMatcher(threshold=config.learning_similarity_threshold),
                relation_threshold=config.learning_similarity_threshold,
                suggestion_threshold=config.suggestion_similarity_threshold,
                max_recent_queries=config.max_recent_queries,
                max_pattern_entries=config.max_pattern_entries,
                clock=wall_clock,
            ),
        )
    
    def clear_caches(self) -> None:
        self.ai_cache.clear()
        self.scan_cache.clear()
        self.discovery_cache.clear()
    
    def purge_expired(self) -> int:
        """Drop expired entries from every cache; returns how many were removed."""
        return sum(
            cache.purge_expired()
            for cache in (self.ai_cache, self.scan_cache, self.discovery_cache)
        )
    
    def performance_report(self) -> Dict[str, Any]:
        """
        Summarize metrics, live cache sizes and tuning hints.
        
        Expired cache entries are purged first.
        
        :return: JSON-serializable report
        """
        self.purge_expired()
        snapshot = self.metrics.snapshot()
        ai_cache_size = len(self.ai_cache)
        return {
            "metrics": snapshot.to_dict(),
            "cache_sizes": {
                "ai_cache": ai_cache_size,
                "scan_cache": len(self.scan_cache),
                "discovery_cache": len(self.discovery_cache),
            },
            "learning": self.learner.stats(),
            "frequent_paths": [
                {"path": path, "count": count}
                for path, count in self.learner.frequent_paths()
            ],
            "suggestions": optimization_suggestions(snapshot, ai_cache_size),
        }
