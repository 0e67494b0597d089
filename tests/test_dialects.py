"""
Tests for path dialect translation.
"""
import pytest

from path_agent.dialects import (
    NullDialectTranslator,
    WslMountTranslator,
    create_dialect_translator,
    is_absolute_path,
    join_path,
)
from path_agent.models import CandidatePath, PathDialect


class TestWslMountTranslator:
    """Tests for drive-letter <-> mount-point translation."""

    def test_drive_path_to_mount(self):
        """C:\\Users\\me maps to /mnt/c/Users/me."""
        other = WslMountTranslator().alternate("C:\\Users\\me\\Desktop")
        assert other == CandidatePath("/mnt/c/Users/me/Desktop", PathDialect.POSIX_MOUNT)

    def test_mount_to_drive_path(self):
        """/mnt/d/work maps back to D:\\work."""
        other = WslMountTranslator().alternate("/mnt/d/work")
        assert other == CandidatePath("D:\\work", PathDialect.NATIVE)

    def test_drive_root(self):
        """Drive roots translate in both directions."""
        translator = WslMountTranslator()
        assert translator.alternate("C:\\").path == "/mnt/c"
        assert translator.alternate("/mnt/c").path == "C:\\"

    def test_plain_posix_path_has_no_alternate(self):
        """Paths outside the mount root have no alternate spelling."""
        assert WslMountTranslator().alternate("/home/me/Desktop") is None

    def test_expand_keeps_given_path_first(self):
        """expand() returns the input, then its alternate."""
        expanded = WslMountTranslator().expand("/mnt/c/Users/me")
        assert [c.path for c in expanded] == ["/mnt/c/Users/me", "C:\\Users\\me"]
        assert expanded[0].dialect is PathDialect.POSIX_MOUNT


class TestFactoryAndHelpers:
    """Tests for translator selection and path helpers."""

    def test_null_translator_expands_to_single_path(self):
        """Single-dialect hosts emit exactly one spelling."""
        assert NullDialectTranslator().expand("/home/me") == [CandidatePath("/home/me")]

    def test_explicit_settings(self):
        """'wsl' and 'none' select their translators directly."""
        assert isinstance(create_dialect_translator("wsl"), WslMountTranslator)
        assert isinstance(create_dialect_translator("none"), NullDialectTranslator)

    def test_auto_uses_probe(self):
        """'auto' picks the mount translator when /mnt/c is present."""
        translator = create_dialect_translator("auto", probe=lambda path: path == "/mnt/c")
        assert isinstance(translator, WslMountTranslator)

    def test_unknown_setting(self):
        """Unknown settings are rejected."""
        with pytest.raises(ValueError):
            create_dialect_translator("cygwin")

    def test_join_path_uses_base_separator(self):
        """Drive-letter bases join with backslashes, POSIX bases with slashes."""
        assert join_path("C:\\Users\\me", "Desktop") == "C:\\Users\\me\\Desktop"
        assert join_path("/home/me", "Desktop") == "/home/me/Desktop"

    @pytest.mark.parametrize("path,expected", [
        ("C:\\Users", True),
        ("/mnt/c", True),
        ("desktop", False),
        ("바탕화면", False),
    ])
    def test_is_absolute_path(self, path, expected):
        assert is_absolute_path(path) is expected
