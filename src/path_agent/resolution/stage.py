"""
Core abstractions for the resolution pipeline.

Each stage turns a query into zero or more candidate paths. The orchestrator
walks an ordered list of stages and stops at the first one that finds anything.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..models import CandidatePath, Query
from ..exceptions import ResolutionErrorCode


@dataclass(frozen=True)
class StageResult:
    """
    Immutable outcome of one stage.
    
    Attributes:
        stage: Name of the stage that produced this result
        candidates: Proposed paths, empty when the stage found nothing
        confidence: How much the stage trusts its answer (0.0-1.0)
        diagnostics: Error codes met while running the stage
    """
    stage: str
    candidates: Tuple[CandidatePath, ...] = ()
    confidence: float = 0.0
    diagnostics: Tuple[ResolutionErrorCode, ...] = ()
    
    @property
    def found(self) -> bool:
        return bool(self.candidates)
    
    @classmethod
    def of(
        cls,
        stage: str,
        candidates: Sequence[CandidatePath],
        confidence: float,
        diagnostics: Sequence[ResolutionErrorCode] = (),
    ) -> "StageResult":
        """Build a result, reporting zero confidence when nothing was found."""
        candidates = tuple(candidates)
        return cls(
            stage=stage,
            candidates=candidates,
            confidence=confidence if candidates else 0.0,
            diagnostics=tuple(diagnostics),
        )
    
    def __post_init__(self):
        """Validate confidence score."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be between 0.0 and 1.0, got {self.confidence}")


class ResolutionStage(ABC):
    """
    One step of the resolution pipeline.
    
    Stages must not raise for ordinary misses; they return an empty StageResult.
    """
    
    name: str = "stage"
    
    @abstractmethod
    async def try_resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> StageResult:
        """
        Attempt to resolve a query.
        
        :param query: Query being resolved
        :param context: Optional caller-supplied hints
        :return: StageResult, empty if this stage has no answer
        """
        pass
