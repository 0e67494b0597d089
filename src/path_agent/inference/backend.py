"""
Inference backend abstraction.

The resolver only needs one capability from an external model: given a query
and the known base directories, return text that should contain a JSON array
of candidate paths.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Mapping


class InferenceBackend(ABC):
    """
    Narrow interface to an external path-inference service.
    
    Implementations raise InferenceError subclasses for transport and protocol
    failures; they do not enforce the overall deadline themselves.
    """
    
    name: str = "backend"
    
    @abstractmethod
    async def ainfer(self, query: str, known_dirs: Mapping[str, str]) -> str:
        """
        Ask the backend for candidate paths (async).
        
        :param query: Raw user query
        :param known_dirs: Label -> path mapping of base directories
        :return: Raw reply text
        :raises: InferenceError on transport or protocol failures
        """
        pass
    
    def infer(self, query: str, known_dirs: Mapping[str, str]) -> str:
        """Synchronous wrapper around ainfer()."""
        return asyncio.run(self.ainfer(query, known_dirs))
