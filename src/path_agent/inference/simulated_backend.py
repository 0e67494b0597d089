"""
Deterministic stand-in for an inference service.

Recognizes a fixed set of phrasings and topic clues. Useful for offline runs
and tests; optional artificial latency exercises the resolver's deadline.
"""
import asyncio
import json
import logging
import re
from typing import List, Mapping, Optional, Tuple

from ..dialects import join_path
from .backend import InferenceBackend

logger = logging.getLogger(__name__)

# (pattern, base label, sub-path)
PHRASE_RULES: Tuple[Tuple[str, str, str], ...] = (
    (r"바탕화면.*?프로그램", "desktop", "프로그램"),
    (r"데스크[탑톱].*?앱", "desktop", "app"),
    (r"문서.*?카카오|카톡.*?문서", "documents", "카카오톡 받은 파일"),
    (r"프로젝트.*?백엔드", "project", "backend"),
    (r"게임.*?폴더|게임즈", "desktop", "Games"),
    (r"개발.*?(?:도구|툴)", "project", "tools"),
)

# (keywords, base label, sub-path)
CONTEXT_CLUES: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("작업", "업무"), "documents", "Work"),
    (("사진", "이미지", "그림"), "pictures", ""),
    (("음악", "노래", "뮤직"), "music", ""),
    (("비디오", "영상", "동영상"), "videos", ""),
    (("게임", "game"), "desktop", "Games"),
    (("개발", "dev", "code"), "project", ""),
)


class SimulatedInferenceBackend(InferenceBackend):
    """
    Pattern-based inference with no network access.
    
    Exposes ``call_count`` so tests can assert whether the backend was consulted.
    """
    
    name = "simulated"
    
    def __init__(self, delay: float = 0.0):
        """
        :param delay: Seconds to sleep before answering
        """
        self.delay = delay
        self.call_count = 0
    
    async def ainfer(self, query: str, known_dirs: Mapping[str, str]) -> str:
        self.call_count += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        
        paths = self.guess(query.lower().strip(), known_dirs)
        if paths:
            logger.debug(f"Simulated inference: '{query}' -> {paths}")
        return json.dumps(paths, ensure_ascii=False)
    
    def guess(self, text: str, known_dirs: Mapping[str, str]) -> List[str]:
        """
        Apply phrase rules first, then context clues.
        
        :param text: Lowercased query
        :param known_dirs: Label -> path mapping of base directories
        :return: Guessed paths, empty if nothing applies
        """
        for pattern, label, sub_path in PHRASE_RULES:
            if re.search(pattern, text):
                path = _under(known_dirs, label, sub_path)
                if path:
                    return [path]
        
        for keywords, label, sub_path in CONTEXT_CLUES:
            if any(keyword in text for keyword in keywords):
                path = _under(known_dirs, label, sub_path)
                if path:
                    return [path]
        
        return []


def _under(known_dirs: Mapping[str, str], label: str, sub_path: str) -> Optional[str]:
    base = known_dirs.get(label)
    if not base:
        return None
    return join_path(base, sub_path) if sub_path else base
