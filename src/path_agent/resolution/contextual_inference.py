"""
Contextual and semantic inference over query phrasing.

Recognizes "<base>에 <name> 폴더" / "desktop <name> folder" style phrases and
broad topic keywords ("개발", "media"), and maps them onto base directories.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Pattern, Tuple

from ..dialects import DialectTranslator, join_path
from ..locations import KnownLocations
from ..models import CandidatePath, Query
from .stage import ResolutionStage, StageResult

logger = logging.getLogger(__name__)

INVALID_NAME_CHARS = set('<>:"|?*')

_KOREAN_PARTICLES = r"(?:에서|에\s*있는|에|의|안의|안에)"
_KOREAN_SUFFIX = r"(?:\s*(?:폴더|디렉토리|안에|안))?"
_ENGLISH_SUFFIX = r"(?:\s+(?:folder|directory|dir))?"

# (korean words, english words, base kind)
BASE_PHRASES: Tuple[Tuple[str, str, str], ...] = (
    ("바탕화면|데스크탑|데스크톱", "desktop", "desktop"),
    ("문서|내\\s*문서", "my documents|documents|document", "documents"),
    ("다운로드", "downloads|download", "downloads"),
    ("사진|그림", "pictures|photos", "pictures"),
    ("음악", "music", "music"),
    ("비디오|동영상", "videos|video", "videos"),
    ("프로젝트", "projects|project", "project_root"),
)

# (pattern, base kinds); only used when no base phrase matched
GENERIC_PATTERNS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (r"^(.+?)\s*폴더$", ("desktop", "project_root", "documents")),
    (r"^(.+?)\s*디렉토리$", ("desktop", "project_root")),
    (r"^(.+?)\s+(?:folder|directory)$", ("desktop", "project_root", "documents")),
)

FOLDER_NAME_TRANSLATIONS = {
    "program": "프로그램",
    "programs": "프로그램",
    "download": "다운로드",
    "downloads": "다운로드",
    "document": "문서",
    "documents": "문서",
    "picture": "사진",
    "pictures": "사진",
    "music": "음악",
    "video": "비디오",
    "videos": "비디오",
}

# (keywords, base kinds)
SEMANTIC_KEYWORDS: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("development", "개발", "programming", "프로그래밍", "coding", "코딩", "project"),
     ("project_root",)),
    (("작업", "work"), ("project_root", "documents")),
    (("multimedia", "media", "미디어"), ("pictures", "videos")),
    (("system", "시스템"), ("system32", "program_files")),
    (("admin", "관리자"), ("system32", "program_data")),
)

_TRAILING_NOISE = re.compile(r"\s*(?:폴더|안에|에서|folder|directory)$")


@dataclass(frozen=True)
class PhrasePattern:
    """A compiled phrase bound to the base directories it points into."""
    regex: Pattern
    bases: Tuple[str, ...]


def _compile_base_phrases() -> List[PhrasePattern]:
    patterns = []
    for korean, english, base in BASE_PHRASES:
        patterns.append(PhrasePattern(
            re.compile(rf"^(?:{korean})\s*{_KOREAN_PARTICLES}\s*(.+?){_KOREAN_SUFFIX}$"),
            (base,),
        ))
        patterns.append(PhrasePattern(
            re.compile(rf"^(?:{english})\s+(.+?){_ENGLISH_SUFFIX}$"),
            (base,),
        ))
        patterns.append(PhrasePattern(
            re.compile(
                rf"^(.+?){_ENGLISH_SUFFIX}\s+(?:on|in|under|inside)\s+(?:the\s+|my\s+)?(?:{english})$"
            ),
            (base,),
        ))
    return patterns


PREFIXED_PATTERNS = _compile_base_phrases()
GENERIC_COMPILED = [PhrasePattern(re.compile(p), bases) for p, bases in GENERIC_PATTERNS]


def clean_folder_name(raw: str) -> Optional[str]:
    """
    Strip particles and "folder" words from a captured name and translate
    common English names to their Korean folder names.
    
    :param raw: Text captured from a phrase pattern
    :return: Usable folder name, or None if nothing valid is left
    """
    name = raw.strip()
    previous = None
    while name != previous:
        previous = name
        name = _TRAILING_NOISE.sub("", name).strip().strip("/\\").strip("'\"").strip()
    
    name = FOLDER_NAME_TRANSLATIONS.get(name, name)
    if not name or name in (".", ".."):
        return None
    if any(ch in INVALID_NAME_CHARS for ch in name):
        return None
    return name


class ContextualInferenceEngine:
    """
    Phrase-pattern and semantic-keyword inference.
    
    Both passes run and their results accumulate; a query can match a phrase
    and a topic keyword at the same time. Duplicates are left for the caller.
    """
    
    def __init__(self, locations: KnownLocations, translator: DialectTranslator):
        """
        :param locations: Base directories phrases resolve into
        :param translator: Dialect translator used to emit both path spellings
        """
        self._locations = locations
        self._translator = translator
    
    def infer(self, query: Query) -> List[CandidatePath]:
        """
        Infer candidate paths from phrasing.
        
        :param query: Query to interpret
        :return: Candidate paths, possibly with duplicates
        """
        text = query.normalized
        if not text:
            return []
        
        candidates = self.infer_from_phrases(text)
        candidates.extend(self.infer_from_keywords(text))
        return candidates
    
    def infer_from_phrases(self, text: str) -> List[CandidatePath]:
        """Match "<base> <name>" phrases, falling back to generic "<name> 폴더" forms."""
        paths = self._apply(PREFIXED_PATTERNS, text)
        if not paths:
            paths = self._apply(GENERIC_COMPILED, text)
        return self._expand(paths)
    
    def infer_from_keywords(self, text: str) -> List[CandidatePath]:
        """Map topic keywords contained in the query to base directories."""
        paths = []
        for keywords, kinds in SEMANTIC_KEYWORDS:
            if not any(keyword in text for keyword in keywords):
                continue
            for kind in kinds:
                path = self._locations.get(kind)
                if path:
                    paths.append(path)
        return self._expand(paths)
    
    def _apply(self, patterns: List[PhrasePattern], text: str) -> List[str]:
        paths = []
        for pattern in patterns:
            match = pattern.regex.match(text)
            if not match:
                continue
            name = clean_folder_name(match.group(1))
            if name is None:
                continue
            for kind in pattern.bases:
                base = self._locations.get(kind)
                if base:
                    paths.append(join_path(base, name))
            logger.debug(f"Phrase '{pattern.regex.pattern}' matched folder '{name}'")
        return paths
    
    def _expand(self, paths: List[str]) -> List[CandidatePath]:
        candidates: List[CandidatePath] = []
        for path in paths:
            candidates.extend(self._translator.expand(path))
        return candidates


class ContextualInferenceStage(ResolutionStage):
    """Pipeline stage for phrase and keyword inference."""
    
    name = "contextual_inference"
    confidence = 0.7
    
    def __init__(self, engine: ContextualInferenceEngine):
        self._engine = engine
    
    async def try_resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> StageResult:
        return StageResult.of(self.name, self._engine.infer(query), self.confidence)
