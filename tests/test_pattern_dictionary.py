"""
Tests for the static pattern dictionary.
"""
import asyncio

import pytest

from path_agent.models import Query
from path_agent.resolution import PatternDictionary, PatternDictionaryStage

from conftest import DESKTOP, DOCUMENTS


@pytest.fixture
def dictionary(locations, wsl):
    return PatternDictionary(locations, wsl)


class TestExactLookup:
    """Exact alias matches."""

    def test_desktop_in_both_dialects(self, dictionary):
        """'desktop' maps to the Desktop folder in both spellings."""
        paths = [c.path for c in dictionary.lookup("desktop")]
        assert paths == [DESKTOP, "/mnt/c/Users/tester/Desktop"]

    @pytest.mark.parametrize("alias", ["바탕화면", "데스크탑", "데스크톱", "桌面"])
    def test_desktop_synonyms(self, dictionary, alias):
        """Korean and CJK synonyms share the Desktop entry."""
        assert dictionary.lookup(alias)[0].path == DESKTOP

    def test_compact_form_matches(self, dictionary):
        """'다운로드 폴더' matches the '다운로드폴더' alias."""
        match = dictionary.match("다운로드 폴더")
        assert match.match_type == "exact"
        assert match.candidates[0].path == "C:\\Users\\tester\\Downloads"

    def test_drive_alias(self, dictionary):
        """Drive aliases map to the drive root."""
        assert [c.path for c in dictionary.lookup("d드라이브")] == ["D:\\", "/mnt/d"]

    def test_project_subfolder(self, dictionary):
        """Project aliases resolve under the project root."""
        assert dictionary.lookup("백엔드")[0].path == "D:\\work\\backend"

    def test_system_folder(self, dictionary):
        """System aliases resolve on the home drive."""
        assert dictionary.lookup("휴지통")[0].path == "C:\\$Recycle.Bin"

    def test_kakaotalk_folder(self, dictionary):
        """KakaoTalk received files live under Documents."""
        assert dictionary.lookup("카톡")[0].path == DOCUMENTS + "\\카카오톡 받은 파일"


class TestPartialLookup:
    """Substring and fuzzy matches."""

    def test_substring_covering_half_the_query(self, dictionary):
        """'my documents' contains 'documents', which covers most of the query."""
        match = dictionary.match("my documents")
        assert match.match_type == "substring"
        assert match.candidates[0].path == DOCUMENTS

    def test_substring_too_small_is_ignored(self, dictionary):
        """A short alias inside a long sentence is not a match."""
        assert dictionary.match("desktop app folder") is None

    def test_single_letter_drive_does_not_match_partially(self, dictionary):
        """Drive letters only ever match exactly."""
        assert dictionary.match("customapp") is None

    def test_fuzzy_typo(self, dictionary):
        """'desktp' is close enough to 'desktop'."""
        match = dictionary.match("desktp")
        assert match is not None
        assert match.match_type == "fuzzy"
        assert match.candidates[0].path == DESKTOP

    def test_empty_query(self, dictionary):
        assert dictionary.lookup("") == []

    @pytest.mark.parametrize("path", ["/mnt/d/downloads", "e:\\music", "c:\\users\\desktop"])
    def test_absolute_paths_skip_partial_matching(self, dictionary, path):
        assert dictionary.match(path) is None

    def test_drive_alias_still_matches_exactly(self, dictionary):
        match = dictionary.match("c:")
        assert match.match_type == "exact"
        assert match.candidates[0].path == "C:\\"


class TestPatternDictionaryStage:
    """Stage wrapper around the dictionary."""

    def test_exact_match_has_full_confidence(self, dictionary):
        result = asyncio.run(PatternDictionaryStage(dictionary).try_resolve(Query("Desktop")))
        assert result.found
        assert result.confidence == 1.0

    def test_miss_is_empty(self, dictionary):
        result = asyncio.run(PatternDictionaryStage(dictionary).try_resolve(Query("zzqx")))
        assert not result.found
        assert result.confidence == 0.0
