"""
Live discovery of folders that match a query.

Scans the immediate children of a handful of base directories and matches
their names against the query. Results are cached briefly so repeated
queries do not hit the disk.
"""
import asyncio
import logging
import re
from typing import Any, List, Mapping, Optional, Tuple

from ..caching import TTLCache
from ..dialects import DialectTranslator, join_path
from ..filesystem import FileSystemGateway
from ..locations import KnownLocations
from ..metrics import PerformanceMetrics
from ..models import CandidatePath, Query
from .fuzzy_matcher import FuzzyMatcher
from .stage import ResolutionStage, StageResult

logger = logging.getLogger(__name__)

MIN_SUBSTRING_LENGTH = 3
MIN_FUZZY_LENGTH = 4

KEYWORD_TRANSLATIONS = (
    ("프로젝트", "project"),
    ("게임", "game"),
    ("음악", "music"),
    ("사진", "photo"),
    ("비디오", "video"),
    ("문서", "document"),
    ("다운로드", "download"),
)

_FOLDER_SUFFIX = re.compile(r"^(.+?)\s*(?:폴더|folder)$")

ScanKey = Tuple[str, str]


class DynamicFolderDiscovery:
    """
    Matches a query against folders that actually exist right now.
    
    Matching order for each child directory:
    1. Exact name
    2. Name contains the query (queries of 3+ characters)
    3. "<name> 폴더" queries: name contains <name>
    4. Bilingual keyword table (Korean query word vs English folder word, and back)
    5. Fuzzy similarity at or above the threshold (queries of 4+ characters)
    """
    
    def __init__(
        self,
        locations: KnownLocations,
        translator: DialectTranslator,
        filesystem: FileSystemGateway,
        scan_cache: TTLCache,
        discovery_cache: TTLCache,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        metrics: Optional[PerformanceMetrics] = None,
    ):
        """
        :param locations: Provides the base directories to scan
        :param translator: Dialect translator for base and result paths
        :param filesystem: Read-only filesystem gateway
        :param scan_cache: Cache keyed by (base, query) holding per-base matches
        :param discovery_cache: Cache keyed by query holding non-empty final results
        :param fuzzy_matcher: Matcher providing the similarity threshold
        :param metrics: Optional counters to update
        """
        self._locations = locations
        self._translator = translator
        self._fs = filesystem
        self._scan_cache = scan_cache
        self._discovery_cache = discovery_cache
        self._fuzzy = fuzzy_matcher or FuzzyMatcher(threshold=0.7)
        self._metrics = metrics
    
    def base_directories(self) -> List[str]:
        """Native bases in priority order, followed by their alternate spellings."""
        natives = self._locations.discovery_bases()
        alternates = []
        for base in natives:
            other = self._translator.alternate(base)
            if other is not None:
                alternates.append(other.path)
        return natives + alternates
    
    async def discover(self, query: Query) -> List[CandidatePath]:
        """
        Find existing folders whose names match the query.
        
        :param query: Query to match
        :return: Matching folders in both dialects, base order preserved
        """
        key = query.normalized
        if not key:
            return []
        
        cached = self._discovery_cache.get(key)
        if cached is not None:
            logger.debug(f"Discovery cache hit for '{key}'")
            return list(cached)
        
        per_base = await asyncio.gather(
            *(self._scan_base(base, key) for base in self.base_directories())
        )
        
        results: List[CandidatePath] = []
        seen = set()
        for matches in per_base:
            for candidate in matches:
                if candidate.path not in seen:
                    seen.add(candidate.path)
                    results.append(candidate)
        
        if results:
            self._discovery_cache.put(key, tuple(results))
            if self._metrics:
                self._metrics.increment(
                    "dynamic_discoveries", sum(1 for matches in per_base if matches)
                )
            logger.info(f"Discovered {len(results)} folder path(s) for '{key}'")
        return results
    
    def is_matching_folder(self, folder_name: str, query: str) -> bool:
        """
        Decide whether a folder name answers a normalized query.
        
        :param folder_name: Directory name as found on disk
        :param query: Normalized query text
        :return: True if any matching rule accepts the pair
        """
        name = folder_name.lower()
        compact = query.replace(" ", "")
        
        if name == query or name == compact:
            return True
        
        if len(compact) >= MIN_SUBSTRING_LENGTH and (query in name or compact in name):
            return True
        
        suffixed = _FOLDER_SUFFIX.match(query)
        if suffixed and suffixed.group(1).strip() in name:
            return True
        
        for korean, english in KEYWORD_TRANSLATIONS:
            if (korean in query and english in name) or (english in query and korean in name):
                return True
        
        if len(compact) >= MIN_FUZZY_LENGTH and self._fuzzy.is_similar(query, name):
            return True
        
        return False
    
    async def _scan_base(self, base: str, query: str) -> Tuple[CandidatePath, ...]:
        cache_key: ScanKey = (base, query)
        cached = self._scan_cache.get(cache_key)
        if cached is not None:
            return cached
        
        try:
            entries = await asyncio.to_thread(self._fs.list_dir, base)
        except OSError as e:
            logger.debug(f"Skipping unreadable base directory {base}: {e}")
            entries = []
        
        matches: List[CandidatePath] = []
        for entry in entries:
            if not entry.is_dir:
                continue
            if self.is_matching_folder(entry.name, query):
                matches.extend(self._translator.expand(join_path(base, entry.name)))
        
        result = tuple(matches)
        self._scan_cache.put(cache_key, result)
        return result


class DynamicDiscoveryStage(ResolutionStage):
    """Pipeline stage scanning well-known directories for matching folders."""
    
    name = "dynamic_discovery"
    confidence = 0.8
    
    def __init__(self, discovery: DynamicFolderDiscovery):
        self._discovery = discovery
    
    async def try_resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> StageResult:
        return StageResult.of(self.name, await self._discovery.discover(query), self.confidence)
