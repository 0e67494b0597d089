"""
Resolution performance counters.

Counters are shared by every query a service instance handles, so all
updates go through a single lock.
"""
import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

HARDCODED_METHODS = ("pattern_dictionary", "explicit_path", "contextual_inference")

# Thresholds for optimization hints
MIN_HARDCODED_HIT_RATE = 0.7
MAX_AI_TIMEOUT_RATE = 0.1
MAX_AI_CACHE_ENTRIES = 1000


@dataclass(frozen=True)
class MetricsSnapshot:
    """Point-in-time copy of the counters."""
    total_queries: int = 0
    hardcoded_hits: int = 0
    dynamic_discovery_hits: int = 0
    dynamic_discoveries: int = 0
    ai_requests: int = 0
    ai_cache_hits: int = 0
    ai_inferences: int = 0
    ai_timeouts: int = 0
    ai_failures: int = 0
    fallback_uses: int = 0
    identity_uses: int = 0
    average_response_ms: float = 0.0
    
    @property
    def hardcoded_hit_rate(self) -> float:
        if not self.total_queries:
            return 0.0
        return self.hardcoded_hits / self.total_queries
    
    @property
    def ai_timeout_rate(self) -> float:
        if not self.ai_requests:
            return 0.0
        return self.ai_timeouts / self.ai_requests
    
    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["hardcoded_hit_rate"] = round(self.hardcoded_hit_rate, 4)
        result["ai_timeout_rate"] = round(self.ai_timeout_rate, 4)
        return result


class PerformanceMetrics:
    """
    Accumulates counters and a cumulative mean response time.
    
    Usage:
        metrics = PerformanceMetrics()
        metrics.record_resolution("pattern_dictionary", elapsed_ms=0.4)
        snapshot = metrics.snapshot()
    """
    
    def __init__(self):
        self._lock = threading.Lock()
        self._counters: Dict[str, int] = {}
        self._total_response_ms = 0.0
        self.reset()
    
    def reset(self) -> None:
        with self._lock:
            self._counters = {
                name: 0 for name, value in asdict(MetricsSnapshot()).items()
                if isinstance(value, int)
            }
            self._total_response_ms = 0.0
    
    def record_resolution(self, method: str, elapsed_ms: float) -> None:
        """
        Count one finished query.
        
        :param method: Name of the stage that produced the answer
        :param elapsed_ms: Wall-clock time spent on the query
        """
        with self._lock:
            self._counters["total_queries"] += 1
            self._total_response_ms += elapsed_ms
            if method in HARDCODED_METHODS:
                self._counters["hardcoded_hits"] += 1
            elif method == "dynamic_discovery":
                self._counters["dynamic_discovery_hits"] += 1
            elif method == "fallback_keywords":
                self._counters["fallback_uses"] += 1
            elif method == "identity":
                self._counters["identity_uses"] += 1
    
    def increment(self, counter: str, amount: int = 1) -> None:
        """Bump a named counter such as ``ai_timeouts``."""
        with self._lock:
            if counter not in self._counters:
                raise KeyError(f"Unknown metric: {counter}")
            self._counters[counter] += amount
    
    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            total = self._counters["total_queries"]
            average = self._total_response_ms / total if total else 0.0
            return MetricsSnapshot(average_response_ms=average, **self._counters)


def optimization_suggestions(snapshot: MetricsSnapshot, ai_cache_size: int = 0) -> List[str]:
    """
    Turn counters into tuning hints.
    
    :param snapshot: Metrics to inspect
    :param ai_cache_size: Current number of AI cache entries
    :return: Human-readable hints, empty when nothing stands out
    """
    hints = []
    if snapshot.total_queries and snapshot.hardcoded_hit_rate < MIN_HARDCODED_HIT_RATE:
        hints.append(
            f"Static tables answered only {snapshot.hardcoded_hit_rate:.0%} of queries; "
            f"consider adding frequent queries to the pattern dictionary."
        )
    if snapshot.ai_requests and snapshot.ai_timeout_rate > MAX_AI_TIMEOUT_RATE:
        hints.append(
            f"{snapshot.ai_timeout_rate:.0%} of inference calls timed out; "
            f"check the inference backend or raise the timeout."
        )
    if ai_cache_size > MAX_AI_CACHE_ENTRIES:
        hints.append(
            f"AI cache holds {ai_cache_size} entries; purge expired entries."
        )
    return hints
