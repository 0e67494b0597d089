"""
Static bilingual lookup tables.

Maps well-known folder names (English, Korean and a few CJK aliases) to
concrete paths under the current user's locations.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..dialects import DialectTranslator, is_absolute_path
from ..locations import KnownLocations
from ..models import CandidatePath, Query
from .fuzzy_matcher import FuzzyMatcher
from .stage import ResolutionStage, StageResult

logger = logging.getLogger(__name__)

# Aliases shorter than this only ever match exactly
MIN_PARTIAL_KEY_LENGTH = 3
MIN_FUZZY_QUERY_LENGTH = 4
FUZZY_KEY_THRESHOLD = 0.8

USER_FOLDER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "desktop": ("desktop", "바탕화면", "데스크탑", "데스크톱", "桌面", "デスクトップ"),
    "downloads": (
        "downloads", "download", "다운로드", "다운로드폴더", "받은파일", "내려받기",
        "下载", "ダウンロード",
    ),
    "documents": (
        "documents", "document", "문서", "내문서", "도큐먼트", "문서폴더", "文档", "ドキュメント",
    ),
    "pictures": (
        "pictures", "사진", "그림", "이미지", "픽처", "사진폴더", "갤러리", "图片", "ピクチャ",
    ),
    "music": ("music", "음악", "뮤직", "노래", "음원", "음악폴더", "音乐", "ミュージック"),
    "videos": (
        "videos", "video", "비디오", "동영상", "영상", "영화", "비디오폴더", "视频", "ビデオ",
    ),
    "kakaotalk": (
        "카카오톡 받은 파일", "카톡 받은 파일", "카카오톡", "카톡",
        "kakaotalk received files", "kakaotalk",
    ),
    "appdata": ("appdata", "앱데이터"),
    "appdata_local": ("appdatalocal", "로컬"),
    "appdata_roaming": ("appdataroaming", "로밍"),
    "temp": ("temp", "임시폴더", "템프"),
    "home": ("home", "홈", "사용자폴더", "유저", "내폴더", "~"),
}

SYSTEM_FOLDER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "recycle_bin": ("recycle", "recyclebin", "휴지통", "쓰레기통", "trash"),
    "program_files": ("programfiles", "program files", "프로그램파일", "프로그램", "programs"),
    "program_files_x86": ("programfilesx86", "program files (x86)"),
    "windows": ("windows", "윈도우", "시스템"),
    "system32": ("system32",),
    "syswow64": ("syswow64",),
    "steam_apps": ("steamapps", "스팀게임"),
    "steam": ("steam", "스팀"),
    "common_files": ("commonfiles",),
    "system_temp": ("systemtemp",),
    "program_data": ("programdata",),
    "inetpub": ("inetpub",),
    "public": ("public", "공용", "퍼블릭"),
    "public_desktop": ("publicdesktop",),
    "public_documents": ("publicdocuments",),
}

# Paths relative to the project root; "" is the root itself
PROJECT_FOLDER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "": ("project", "projects", "프로젝트", "my_app", "myapp", "workspace", "작업공간"),
    "backend": ("backend", "백엔드"),
    "frontend": ("frontend", "프론트엔드"),
    "apps/electron": ("electron", "일렉트론"),
    "packages": ("packages", "패키지"),
    "ai": ("ai", "인공지능"),
}

DRIVE_ALIASES: Dict[str, Tuple[str, ...]] = {
    "c": ("시드라이브", "메인드라이브"),
    "d": ("디드라이브", "보조드라이브"),
}
DRIVE_LETTERS = ("c", "d", "e", "f")


@dataclass(frozen=True)
class DictionaryMatch:
    """A dictionary hit: which alias matched, how, and the paths it maps to."""
    table: str
    alias: str
    match_type: str  # "exact", "substring" or "fuzzy"
    candidates: Tuple[CandidatePath, ...]


class PatternDictionary:
    """
    Static alias tables in priority order: user, system, project, drives.
    
    Lookup order:
    1. Exact alias match (normalized or whitespace-free form)
    2. Substring containment in either direction, covering at least half the query
    3. Typo-tolerant fuzzy match against every alias
    
    Absolute paths stop after step 1.
    
    Side-effect free; the tables are built once from KnownLocations.
    """
    
    def __init__(
        self,
        locations: KnownLocations,
        translator: DialectTranslator,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
    ):
        """
        :param locations: Base directories the tables resolve against
        :param translator: Dialect translator used to emit both path spellings
        :param fuzzy_matcher: Matcher for the typo-tolerant step
        """
        self._translator = translator
        self._fuzzy = fuzzy_matcher or FuzzyMatcher(threshold=FUZZY_KEY_THRESHOLD)
        self._tables: List[Tuple[str, Dict[str, List[str]]]] = [
            ("user", self._build_named_table(USER_FOLDER_ALIASES, locations.user_folders())),
            ("system", self._build_named_table(SYSTEM_FOLDER_ALIASES, locations.system_folders())),
            ("project", self._build_project_table(locations)),
            ("drive", self._build_drive_table()),
        ]
    
    @property
    def tables(self) -> List[Tuple[str, Dict[str, List[str]]]]:
        return self._tables
    
    def aliases(self) -> List[str]:
        return [alias for _, table in self._tables for alias in table]
    
    def lookup(self, normalized_query: str) -> List[CandidatePath]:
        """
        Resolve a normalized query against the static tables.
        
        :param normalized_query: Lowercased, trimmed query text
        :return: Candidate paths in both dialects, empty if nothing matched
        """
        match = self.match(normalized_query)
        return list(match.candidates) if match else []
    
    def match(self, normalized_query: str) -> Optional[DictionaryMatch]:
        """
        Like lookup(), but reports which alias matched and how.
        
        :param normalized_query: Lowercased, trimmed query text
        :return: DictionaryMatch or None
        """
        query = normalized_query.strip().lower()
        if not query:
            return None
        compact = query.replace(" ", "")
        forms = (query,) if compact == query else (query, compact)
        
        for table_name, table in self._tables:
            for form in forms:
                if form in table:
                    return self._to_match(table_name, form, "exact", table[form])
        
        # Absolute paths match verbatim only
        if is_absolute_path(query):
            return None
        
        if len(compact) >= MIN_PARTIAL_KEY_LENGTH:
            for table_name, table in self._tables:
                alias = self._best_partial(table, forms)
                if alias is not None:
                    return self._to_match(table_name, alias, "substring", table[alias])
        
        if len(compact) >= MIN_FUZZY_QUERY_LENGTH:
            return self._fuzzy_match(query)
        
        return None
    
    def _best_partial(self, table: Dict[str, List[str]], forms: Tuple[str, ...]) -> Optional[str]:
        best_alias, best_overlap = None, 0
        for alias in table:
            if len(alias) < MIN_PARTIAL_KEY_LENGTH:
                continue
            for form in forms:
                if alias not in form and form not in alias:
                    continue
                overlap = min(len(alias), len(form))
                if overlap >= max(len(form), MIN_PARTIAL_KEY_LENGTH) * 0.5 and overlap > best_overlap:
                    best_alias, best_overlap = alias, overlap
        return best_alias
    
    def _fuzzy_match(self, query: str) -> Optional[DictionaryMatch]:
        owners = {}
        for table_name, table in self._tables:
            for alias in table:
                if len(alias) >= MIN_FUZZY_QUERY_LENGTH:
                    owners.setdefault(alias, table_name)
        
        best = self._fuzzy.best_match(query, list(owners), threshold=FUZZY_KEY_THRESHOLD)
        if best is None:
            return None
        
        alias, score = best
        table_name = owners[alias]
        logger.debug(f"Dictionary fuzzy match: '{query}' -> '{alias}' ({score:.2f})")
        return self._to_match(table_name, alias, "fuzzy", dict(self._tables)[table_name][alias])
    
    def _to_match(
        self, table_name: str, alias: str, match_type: str, paths: List[str]
    ) -> DictionaryMatch:
        candidates: List[CandidatePath] = []
        for path in paths:
            candidates.extend(self._translator.expand(path))
        return DictionaryMatch(table_name, alias, match_type, tuple(candidates))
    
    @staticmethod
    def _build_named_table(
        aliases: Dict[str, Tuple[str, ...]], folders: Dict[str, str]
    ) -> Dict[str, List[str]]:
        table: Dict[str, List[str]] = {}
        for kind, names in aliases.items():
            path = folders.get(kind)
            if path is None:
                continue
            for name in names:
                table.setdefault(name, [path])
        return table
    
    @staticmethod
    def _build_project_table(locations: KnownLocations) -> Dict[str, List[str]]:
        table: Dict[str, List[str]] = {}
        for relative, names in PROJECT_FOLDER_ALIASES.items():
            parts = relative.split("/") if relative else []
            path = locations.under_project(*parts)
            for name in names:
                table.setdefault(name, [path])
        return table
    
    @staticmethod
    def _build_drive_table() -> Dict[str, List[str]]:
        table: Dict[str, List[str]] = {}
        for letter in DRIVE_LETTERS:
            root = f"{letter.upper()}:\\"
            for name in (
                f"{letter}:", letter, f"{letter}드라이브", f"{letter} 드라이브",
                f"{letter}drive", f"{letter} drive",
            ):
                table[name] = [root]
        for letter, names in DRIVE_ALIASES.items():
            for name in names:
                table[name] = [f"{letter.upper()}:\\"]
        return table


class PatternDictionaryStage(ResolutionStage):
    """Pipeline stage answering from the static tables."""
    
    name = "pattern_dictionary"
    
    CONFIDENCE = {"exact": 1.0, "substring": 0.85, "fuzzy": 0.75}
    
    def __init__(self, dictionary: PatternDictionary):
        self._dictionary = dictionary
    
    async def try_resolve(
        self,
        query: Query,
        context: Optional[Mapping[str, Any]] = None,
    ) -> StageResult:
        match = self._dictionary.match(query.normalized)
        if match is None:
            return StageResult(stage=self.name)
        
        logger.debug(
            f"Dictionary {match.match_type} match in {match.table} table: "
            f"'{query.normalized}' -> '{match.alias}'"
        )
        return StageResult.of(self.name, match.candidates, self.CONFIDENCE[match.match_type])
