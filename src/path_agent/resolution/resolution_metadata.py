"""
Final result of resolving one query.

Carries the answer plus enough metadata to explain how it was reached.
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

from ..exceptions import ResolutionErrorCode
from ..models import CandidatePath

if TYPE_CHECKING:
    from ..learning.user_pattern_learner import Suggestion


@dataclass(frozen=True)
class ResolutionResult:
    """
    Immutable answer for a query.
    
    Attributes:
        query: Query text as the caller supplied it
        candidates: Ordered, de-duplicated paths; never empty
        method: Name of the stage that produced the answer
        confidence: Confidence of that stage (0.0-1.0)
        elapsed_ms: Wall-clock time spent resolving
        diagnostics: Error codes met along the way (timeouts, malformed replies, ...)
        suggestions: Advisory hints from usage history
    """
    query: str
    candidates: Tuple[CandidatePath, ...]
    method: str
    confidence: float
    elapsed_ms: float = 0.0
    diagnostics: Tuple[ResolutionErrorCode, ...] = ()
    suggestions: Tuple["Suggestion", ...] = field(default_factory=tuple)
    
    def __post_init__(self):
        """Validate invariants."""
        if not self.candidates:
            raise ValueError("ResolutionResult requires at least one candidate path")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be between 0.0 and 1.0, got {self.confidence}")
    
    @property
    def paths(self) -> List[str]:
        return [candidate.path for candidate in self.candidates]
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            "query": self.query,
            "paths": self.paths,
            "method": self.method,
            "confidence": self.confidence,
            "elapsed_ms": round(self.elapsed_ms, 3),
        }
        
        if self.diagnostics:
            result["diagnostics"] = [code.value for code in self.diagnostics]
        
        if self.suggestions:
            result["suggestions"] = [suggestion.to_dict() for suggestion in self.suggestions]
        
        return result
