"""
Pass-through for queries that are already absolute paths.
"""
from typing import Any, Mapping, Optional

from ..dialects import DialectTranslator, is_absolute_path
from ..models import Query
from .stage import ResolutionStage, StageResult


class ExplicitPathStage(ResolutionStage):
    """Returns an absolute path as-is, plus its alternate-dialect spelling."""
    
    name = "explicit_path"
    confidence = 0.95
    
    def __init__(self, translator: DialectTranslator):
        self._translator = translator
    
    async def try_resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> StageResult:
        path = query.raw.strip()
        if not is_absolute_path(path):
            return StageResult(stage=self.name)
        return StageResult.of(self.name, self._translator.expand(path), self.confidence)
