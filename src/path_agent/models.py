"""
Core value types shared by every resolution stage.
"""
import re
from dataclasses import dataclass, field
from enum import Enum

_WHITESPACE = re.compile(r"\s+")


def normalize_query(text: str) -> str:
    """Lowercase, trim and collapse internal whitespace runs to a single space."""
    return _WHITESPACE.sub(" ", text.strip().lower())


@dataclass(frozen=True)
class Query:
    """
    A user's location request.
    
    Attributes:
        raw: Text exactly as the user typed it
        normalized: Lowercased, trimmed, whitespace-collapsed form used for matching and caching
    """
    raw: str
    normalized: str = field(init=False)
    
    def __post_init__(self):
        object.__setattr__(self, "normalized", normalize_query(self.raw))
    
    @property
    def compact(self) -> str:
        """Normalized form with all whitespace removed."""
        return self.normalized.replace(" ", "")
    
    def __str__(self) -> str:
        return self.raw


class PathDialect(str, Enum):
    """Representation a path string is written in."""
    NATIVE = "native"
    POSIX_MOUNT = "posix_mount"


@dataclass(frozen=True)
class CandidatePath:
    """A filesystem path proposed for a query, tagged with its dialect."""
    path: str
    dialect: PathDialect = PathDialect.NATIVE
    
    def __str__(self) -> str:
        return self.path
