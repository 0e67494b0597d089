"""
Factory for the resolution pipeline.

Builds every stage from configuration and wires them, in order, into a
ResolutionOrchestrator. Reordering or removing a stage is a one-line change
in ``build_stages``.
"""
import logging
from typing import List, Optional

from ..config import PathAgentConfig
from ..dialects import DialectTranslator, create_dialect_translator
from ..filesystem import FileSystemGateway, LocalFileSystem
from ..inference import (
    HttpInferenceBackend,
    InferenceBackend,
    LangChainInferenceBackend,
    SimulatedInferenceBackend,
)
from ..llm_factory import get_llm_instance
from ..locations import KnownLocations
from ..orchestration.resolution_orchestrator import ResolutionOrchestrator
from ..state import ResolverState
from .ai_resolver import AIBackedResolver, AIResolutionStage
from .contextual_inference import ContextualInferenceEngine, ContextualInferenceStage
from .explicit_path import ExplicitPathStage
from .fallback_keywords import FallbackKeywordStage
from .folder_discovery import DynamicDiscoveryStage, DynamicFolderDiscovery
from .fuzzy_matcher import FuzzyMatcher
from .path_verifier import PathVerifier
from .pattern_dictionary import PatternDictionary, PatternDictionaryStage
from .stage import ResolutionStage

logger = logging.getLogger(__name__)


def create_inference_backend(
    config: PathAgentConfig,
    locations: Optional[KnownLocations] = None,
) -> InferenceBackend:
    """
    Create the inference backend named by ``config.inference_backend``.
    
    :param config: PathAgentConfig instance
    :param locations: Locations (for the username mentioned in prompts)
    :return: InferenceBackend instance
    :raises: ValueError for an unknown backend name
    """
    locations = locations or KnownLocations.from_config(config)
    backend = config.inference_backend.lower()
    
    if backend == "http":
        return HttpInferenceBackend(
            url=config.inference_url,
            provider=config.inference_provider,
            model=config.inference_model,
            timeout=config.ai_timeout_seconds,
            username=locations.username,
        )
    
    if backend == "langchain":
        llm = get_llm_instance(provider=config.inference_provider, model=config.inference_model)
        return LangChainInferenceBackend(llm, username=locations.username)
    
    if backend == "simulated":
        return SimulatedInferenceBackend()
    
    raise ValueError(f"Unknown inference backend: {config.inference_backend}")


def build_stages(
    config: PathAgentConfig,
    state: ResolverState,
    locations: KnownLocations,
    translator: DialectTranslator,
    filesystem: FileSystemGateway,
    backend: Optional[InferenceBackend],
) -> List[ResolutionStage]:
    """
    Build the ordered stage list.
    
    Order: dictionary, explicit path, contextual inference, live discovery,
    AI (cache then backend), fallback keywords. Identity is the orchestrator's
    own last resort.
    """
    stages: List[ResolutionStage] = [
        PatternDictionaryStage(PatternDictionary(locations, translator)),
        ExplicitPathStage(translator),
        ContextualInferenceStage(ContextualInferenceEngine(locations, translator)),
        DynamicDiscoveryStage(DynamicFolderDiscovery(
            locations=locations,
            translator=translator,
            filesystem=filesystem,
            scan_cache=state.scan_cache,
            discovery_cache=state.discovery_cache,
            fuzzy_matcher=FuzzyMatcher(threshold=config.folder_match_threshold),
            metrics=state.metrics,
        )),
    ]
    
    if config.ai_enabled and backend is not None:
        stages.append(AIResolutionStage(AIBackedResolver(
            backend=backend,
            verifier=PathVerifier(filesystem),
            ai_cache=state.ai_cache,
            locations=locations,
            translator=translator,
            timeout=config.ai_timeout_seconds,
            metrics=state.metrics,
        )))
    
    stages.append(FallbackKeywordStage(locations, translator))
    return stages


def create_orchestrator(
    config: Optional[PathAgentConfig] = None,
    state: Optional[ResolverState] = None,
    filesystem: Optional[FileSystemGateway] = None,
    translator: Optional[DialectTranslator] = None,
    backend: Optional[InferenceBackend] = None,
    locations: Optional[KnownLocations] = None,
) -> ResolutionOrchestrator:
    """
    Factory function to create a fully wired ResolutionOrchestrator.
    
    Every collaborator can be injected; missing ones are built from config.
    
    :param config: PathAgentConfig instance (defaults used if None)
    :param state: Shared mutable state (fresh if None)
    :param filesystem: Filesystem gateway (host filesystem if None)
    :param translator: Dialect translator (from config.dialect if None)
    :param backend: Inference backend (from config.inference_backend if None)
    :param locations: Base directories (from config if None)
    :return: ResolutionOrchestrator
    """
    config = config or PathAgentConfig()
    state = state or ResolverState.from_config(config)
    filesystem = filesystem or LocalFileSystem()
    translator = translator or create_dialect_translator(config.dialect)
    locations = locations or KnownLocations.from_config(config)
    
    if backend is None and config.ai_enabled:
        backend = create_inference_backend(config, locations)
    
    stages = build_stages(config, state, locations, translator, filesystem, backend)
    logger.info(f"Resolution pipeline: {' -> '.join(stage.name for stage in stages)} -> identity")
    
    return ResolutionOrchestrator(stages=stages, learner=state.learner, metrics=state.metrics)
