"""
Normalized edit-distance similarity using rapidfuzz.

Handles typos and near-misses in folder names and dictionary keys.
"""
from typing import Iterable, Optional, Tuple
from rapidfuzz import process
from rapidfuzz.distance import Levenshtein


class FuzzyMatcher:
    """
    Similarity in [0.0, 1.0] defined as ``1 - levenshtein(a, b) / max(len(a), len(b))``.
    
    Symmetric and reflexive; two empty strings are identical (1.0).
    
    Usage:
        matcher = FuzzyMatcher(threshold=0.7)
        matcher.similarity("desktop", "dekstop")   # 0.714...
        matcher.best_match("desktp", ["desktop", "documents"])
    """
    
    def __init__(self, threshold: float = 0.7):
        """
        Initialize fuzzy matcher.
        
        :param threshold: Minimum similarity to accept a match (0.0-1.0)
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0.0 and 1.0, got {threshold}")
        
        self.threshold = threshold
    
    @staticmethod
    def similarity(a: str, b: str) -> float:
        """
        Normalized Levenshtein similarity of two strings.
        
        :param a: First string
        :param b: Second string
        :return: 1.0 for identical strings, 0.0 for nothing in common
        """
        if not a and not b:
            return 1.0
        return Levenshtein.normalized_similarity(a, b)
    
    def is_similar(self, a: str, b: str) -> bool:
        """Check if similarity meets the threshold."""
        return self.similarity(a, b) >= self.threshold
    
    def best_match(
        self,
        query: str,
        choices: Iterable[str],
        threshold: Optional[float] = None,
    ) -> Optional[Tuple[str, float]]:
        """
        Find the most similar choice.
        
        :param query: String to match
        :param choices: Candidate strings
        :param threshold: Override for the instance threshold
        :return: (choice, similarity) if one meets the threshold, else None
        """
        cutoff = self.threshold if threshold is None else threshold
        choices = list(choices)
        if not choices:
            return None
        
        result = process.extractOne(
            query,
            choices,
            scorer=Levenshtein.normalized_similarity,
            score_cutoff=cutoff,
        )
        if result is None:
            return None
        
        matched_value, score, _ = result
        return matched_value, float(score)
