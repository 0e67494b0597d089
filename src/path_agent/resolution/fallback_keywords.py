"""
Last-resort keyword table.

Catches queries that merely mention one of the three most common folders
somewhere in a longer sentence.
"""
from typing import Any, List, Mapping, Optional, Tuple

from ..dialects import DialectTranslator
from ..locations import KnownLocations
from ..models import CandidatePath, Query
from .stage import ResolutionStage, StageResult

FALLBACK_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("desktop", "바탕화면"), "desktop"),
    (("download", "다운로드"), "downloads"),
    (("document", "문서"), "documents"),
)


class FallbackKeywordStage(ResolutionStage):
    """Maps any mention of desktop / download / document to that folder."""
    
    name = "fallback_keywords"
    confidence = 0.3
    
    def __init__(self, locations: KnownLocations, translator: DialectTranslator):
        self._locations = locations
        self._translator = translator
    
    def candidates_for(self, text: str) -> List[CandidatePath]:
        candidates: List[CandidatePath] = []
        for keywords, kind in FALLBACK_KEYWORDS:
            if any(keyword in text for keyword in keywords):
                candidates.extend(self._translator.expand(self._locations.get(kind)))
        return candidates
    
    async def try_resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> StageResult:
        return StageResult.of(self.name, self.candidates_for(query.normalized), self.confidence)
