"""
Usage-history learning.

Tracks how often queries repeat and which queries resemble each other, and
turns that history into advisory suggestions.
"""
from .user_pattern_learner import UserPatternLearner, Suggestion

__all__ = [
    "UserPatternLearner",
    "Suggestion",
]
