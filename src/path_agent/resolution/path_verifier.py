"""
Existence checks for candidate paths.
"""
import asyncio
import logging
from typing import List, Sequence

from ..filesystem import FileSystemGateway
from ..models import CandidatePath

logger = logging.getLogger(__name__)


class PathVerifier:
    """
    Filters candidates down to the ones that exist.
    
    Each path is checked independently and concurrently; the output keeps the
    input order. A check that fails with an OS error counts as "absent".
    """
    
    def __init__(self, filesystem: FileSystemGateway):
        self._fs = filesystem
    
    async def verify(self, candidates: Sequence[CandidatePath]) -> List[CandidatePath]:
        """
        Keep only existing paths.
        
        :param candidates: Paths to check
        :return: Subset of candidates that exist, in input order
        """
        if not candidates:
            return []
        
        flags = await asyncio.gather(*(self._exists(c.path) for c in candidates))
        return [candidate for candidate, exists in zip(candidates, flags) if exists]
    
    async def _exists(self, path: str) -> bool:
        try:
            return await asyncio.to_thread(self._fs.exists, path)
        except OSError as e:
            logger.debug(f"Existence check failed for {path}: {e}")
            return False
