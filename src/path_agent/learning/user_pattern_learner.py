"""
Per-user query pattern learner.

Bounded, in-memory history. No persistence: everything is lost on restart.
"""
import threading
import time
from collections import Counter, deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from ..models import normalize_query
from ..resolution.fuzzy_matcher import FuzzyMatcher

RELATION_WEIGHT = 0.5
FREQUENT_REPEAT_MIN_COUNT = 3
FREQUENT_REPEAT_CONFIDENCE = 0.9
SIMILAR_PATTERN_MIN_COUNT = 2
SIMILAR_PATTERN_CONFIDENCE_SCALE = 0.8
RECENT_CONTEXT_WINDOW = 5
RECENT_CONTEXT_SECONDS = 300.0
RECENT_CONTEXT_CONFIDENCE = 0.7
MAX_FREQUENT_PATHS = 50
KEPT_FREQUENT_PATHS = 10


@dataclass(frozen=True)
class Suggestion:
    """
    An advisory hint derived from usage history.
    
    Attributes:
        kind: "frequent_repeat", "similar_pattern" or "recent_context"
        value: The query or keywords the hint refers to
        confidence: Strength of the hint (0.0-1.0)
    """
    kind: str
    value: str
    confidence: float
    
    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "value": self.value, "confidence": round(self.confidence, 4)}


class UserPatternLearner:
    """
    Learns from the queries a user sends.
    
    Key traits:
    - Frequency count and last-use time per query
    - Relation weights between queries that look alike
    - Ring buffer of the most recent queries
    - Advisory only: never changes what the resolver returns
    """
    
    def __init__(
        self,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        relation_threshold: float = 0.7,
        suggestion_threshold: float = 0.6,
        max_recent_queries: int = 100,
        max_pattern_entries: int = 5000,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize learner.
        
        :param fuzzy_matcher: Similarity function provider
        :param relation_threshold: Similarity above which two queries are related
        :param suggestion_threshold: Similarity above which a known query is suggested
        :param max_recent_queries: Capacity of the recency buffer
        :param max_pattern_entries: Maximum number of distinct queries tracked
        :param clock: Wall-clock time source (injectable for tests)
        """
        self._matcher = fuzzy_matcher or FuzzyMatcher()
        self.relation_threshold = relation_threshold
        self.suggestion_threshold = suggestion_threshold
        self.max_pattern_entries = max_pattern_entries
        self._clock = clock
        self._lock = threading.Lock()
        
        self._counts: Dict[str, int] = {}
        self._last_used: Dict[str, float] = {}
        self._relations: Dict[Tuple[str, str], float] = {}
        self._recent: Deque[Tuple[str, float]] = deque(maxlen=max_recent_queries)
        self._path_usage: Dict[str, int] = {}
    
    def record(self, query: str) -> None:
        """
        Record one occurrence of a query.
        
        :param query: Raw or normalized query text
        """
        token = normalize_query(query)
        if not token:
            return
        
        now = self._clock()
        with self._lock:
            self._counts[token] = self._counts.get(token, 0) + 1
            self._last_used[token] = now
            self._recent.appendleft((token, now))
            
            for other in self._counts:
                if other == token:
                    continue
                if self._matcher.similarity(token, other) > self.relation_threshold:
                    key = (token, other)
                    self._relations[key] = self._relations.get(key, 0.0) + RELATION_WEIGHT
            
            if len(self._counts) > self.max_pattern_entries:
                self._prune_locked()
    
    def suggest_for(self, query: str) -> List[Suggestion]:
        """
        Produce suggestions for a query, strongest first.
        
        :param query: Raw or normalized query text
        :return: List of Suggestion objects sorted by confidence (descending)
        """
        token = normalize_query(query)
        now = self._clock()
        suggestions: List[Suggestion] = []
        
        with self._lock:
            if self._counts.get(token, 0) >= FREQUENT_REPEAT_MIN_COUNT:
                suggestions.append(
                    Suggestion("frequent_repeat", token, FREQUENT_REPEAT_CONFIDENCE)
                )
            
            for other, count in self._counts.items():
                if other == token or count < SIMILAR_PATTERN_MIN_COUNT:
                    continue
                similarity = self._matcher.similarity(token, other)
                if similarity > self.suggestion_threshold:
                    suggestions.append(Suggestion(
                        "similar_pattern",
                        other,
                        similarity * SIMILAR_PATTERN_CONFIDENCE_SCALE,
                    ))
            
            recent = [
                recent_token
                for recent_token, used_at in list(self._recent)[:RECENT_CONTEXT_WINDOW]
                if now - used_at < RECENT_CONTEXT_SECONDS
            ]
        
        keywords = self._common_keywords(recent) if len(recent) >= 2 else []
        if keywords:
            suggestions.append(
                Suggestion("recent_context", " ".join(keywords), RECENT_CONTEXT_CONFIDENCE)
            )
        
        return sorted(suggestions, key=lambda s: s.confidence, reverse=True)
    
    def record_path_usage(self, path: str) -> None:
        """
        Count a path the caller actually used.
        
        Once more than 50 paths are tracked, only the 10 most used survive.
        """
        with self._lock:
            self._path_usage[path] = self._path_usage.get(path, 0) + 1
            if len(self._path_usage) > MAX_FREQUENT_PATHS:
                top = Counter(self._path_usage).most_common(KEPT_FREQUENT_PATHS)
                self._path_usage = dict(top)
    
    def frequent_paths(self, limit: int = KEPT_FREQUENT_PATHS) -> List[Tuple[str, int]]:
        with self._lock:
            return Counter(self._path_usage).most_common(limit)
    
    def frequency(self, query: str) -> int:
        with self._lock:
            return self._counts.get(normalize_query(query), 0)
    
    def last_used(self, query: str) -> Optional[float]:
        with self._lock:
            return self._last_used.get(normalize_query(query))
    
    def relations(self) -> Dict[str, float]:
        """Relation weights keyed as ``"query:related_query"``."""
        with self._lock:
            return {f"{a}:{b}": weight for (a, b), weight in self._relations.items()}
    
    def recent_queries(self) -> List[str]:
        """Recent queries, newest first."""
        with self._lock:
            return [token for token, _ in self._recent]
    
    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "tracked_queries": len(self._counts),
                "relations": len(self._relations),
                "recent_queries": len(self._recent),
                "tracked_paths": len(self._path_usage),
            }
    
    def reset(self) -> None:
        """Forget all history."""
        with self._lock:
            self._counts.clear()
            self._last_used.clear()
            self._relations.clear()
            self._recent.clear()
            self._path_usage.clear()
    
    def _prune_locked(self) -> None:
        kept = dict(Counter(self._counts).most_common(self.max_pattern_entries))
        self._counts = kept
        self._last_used = {token: self._last_used[token] for token in kept}
        self._relations = {
            key: weight for key, weight in self._relations.items()
            if key[0] in kept and key[1] in kept
        }
    
    @staticmethod
    def _common_keywords(queries: List[str]) -> List[str]:
        words = Counter(word for q in queries for word in q.split() if len(word) >= 2)
        return [word for word, count in words.items() if count >= 2]
