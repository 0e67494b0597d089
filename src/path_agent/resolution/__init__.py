"""
Resolution layer: turns natural-language location queries into paths.

Key components:
- ResolutionStage / StageResult: Stage protocol and per-stage outcome
- PatternDictionary: Static bilingual alias tables
- ContextualInferenceEngine: Phrase patterns and topic keywords
- FuzzyMatcher: Normalized edit-distance similarity (rapidfuzz)
- DynamicFolderDiscovery: Live scan of well-known directories
- AIBackedResolver: Inference backend under a deadline, verified and cached
- PathVerifier: Concurrent existence checks
- ResolutionResult: Final answer with method, confidence and diagnostics

The pipeline itself is assembled by ``resolver_factory.create_orchestrator``.
"""
from .stage import ResolutionStage, StageResult
from .fuzzy_matcher import FuzzyMatcher
from .pattern_dictionary import PatternDictionary, PatternDictionaryStage
from .explicit_path import ExplicitPathStage
from .contextual_inference import ContextualInferenceEngine, ContextualInferenceStage
from .folder_discovery import DynamicFolderDiscovery, DynamicDiscoveryStage
from .path_verifier import PathVerifier
from .ai_resolver import AIBackedResolver, AIResolution, AIResolutionStage
from .fallback_keywords import FallbackKeywordStage
from .resolution_metadata import ResolutionResult

__all__ = [
    "ResolutionStage",
    "StageResult",
    "FuzzyMatcher",
    "PatternDictionary",
    "PatternDictionaryStage",
    "ExplicitPathStage",
    "ContextualInferenceEngine",
    "ContextualInferenceStage",
    "DynamicFolderDiscovery",
    "DynamicDiscoveryStage",
    "PathVerifier",
    "AIBackedResolver",
    "AIResolution",
    "AIResolutionStage",
    "FallbackKeywordStage",
    "ResolutionResult",
]
