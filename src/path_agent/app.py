"""
Public application facade for Path Agent Service.

This is the single stable entry point for the library.
All internal structure can change freely, but this API remains stable.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from .config import PathAgentConfig
from .dialects import DialectTranslator
from .filesystem import FileSystemGateway
from .inference.backend import InferenceBackend
from .locations import KnownLocations
from .logging_config import setup_logging
from .resolution.resolution_metadata import ResolutionResult
from .resolution.resolver_factory import create_orchestrator
from .service import PathResolutionService
from .state import ResolverState

logger = logging.getLogger(__name__)


class PathAgentApp:
    """
    Public application facade for Path Agent Service.
    
    All dependency wiring and factory usage is encapsulated here. Any
    collaborator can be replaced by passing it to the constructor.
    
    Usage:
        config = load_config_from_env()
        app = PathAgentApp(config)
        app.initialize()
        paths = app.resolve("바탕화면에 프로그램 폴더")
    """
    
    def __init__(
        self,
        config: Optional[PathAgentConfig] = None,
        filesystem: Optional[FileSystemGateway] = None,
        backend: Optional[InferenceBackend] = None,
        translator: Optional[DialectTranslator] = None,
        state: Optional[ResolverState] = None,
    ):
        """
        Initialize the application facade.
        
        :param config: PathAgentConfig instance (defaults if None)
        :param filesystem: Optional filesystem gateway override
        :param backend: Optional inference backend override
        :param translator: Optional dialect translator override
        :param state: Optional pre-built shared state
        """
        self._config = config or PathAgentConfig()
        self._filesystem = filesystem
        self._backend = backend
        self._translator = translator
        self._state = state
        self._service: Optional[PathResolutionService] = None
    
    def initialize(self) -> None:
        """
        Build the resolution pipeline and wire it into the service.
        
        Call this once before resolve(). Calling it again is a no-op.
        """
        if self._service:
            return
        
        if self._config.configure_logging:
            setup_logging(self._config.log_level)
        
        locations = KnownLocations.from_config(self._config)
        self._service = PathResolutionService(self._config, state=self._state)
        orchestrator = create_orchestrator(
            config=self._config,
            state=self._service.state,
            filesystem=self._filesystem,
            translator=self._translator,
            backend=self._backend,
            locations=locations,
        )
        self._service.set_orchestrator(orchestrator)
        logger.info(f"Path agent initialized for home directory {locations.home}")
    
    @property
    def service(self) -> PathResolutionService:
        return self._require_service()
    
    def resolve(self, query: str, context: Optional[Mapping[str, Any]] = None) -> List[str]:
        """
        Resolve a query to candidate paths.
        
        :param query: Natural-language location query
        :param context: Optional hints (e.g. ``{"known_dirs": {...}}``)
        :return: Ordered, non-empty list of paths
        :raises: RuntimeError if initialize() has not been called
        """
        return self._require_service().resolve(query, context)
    
    async def aresolve(self, query: str, context: Optional[Mapping[str, Any]] = None) -> List[str]:
        return await self._require_service().aresolve(query, context)
    
    def resolve_detailed(
        self, query: str, context: Optional[Mapping[str, Any]] = None
    ) -> ResolutionResult:
        return self._require_service().resolve_detailed(query, context)
    
    def performance_report(self) -> Dict[str, Any]:
        return self._require_service().performance_report()
    
    def _require_service(self) -> PathResolutionService:
        if not self._service:
            raise RuntimeError("App not initialized. Call initialize() first.")
        return self._service
