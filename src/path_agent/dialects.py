"""
Path dialect translation.

A single logical location may be written two ways, e.g. ``C:\\Users\\me\\Desktop``
and ``/mnt/c/Users/me/Desktop`` under a Linux subsystem. Translators produce the
alternate spelling; callers treat both as alternatives for the same place.
"""
import logging
import ntpath
import os
import posixpath
import re
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .models import CandidatePath, PathDialect

logger = logging.getLogger(__name__)

_DRIVE_PATH = re.compile(r"^([A-Za-z]):(?:[\\/](.*))?$")


def is_drive_path(path: str) -> bool:
    """True for drive-letter paths such as ``C:\\Users``."""
    return bool(_DRIVE_PATH.match(path))


def is_absolute_path(path: str) -> bool:
    """True for absolute paths in either the drive-letter or the POSIX dialect."""
    return is_drive_path(path) or path.startswith("/") or path.startswith("\\\\")


def join_path(base: str, *parts: str) -> str:
    """Join path segments using the separator style of ``base``."""
    if is_drive_path(base) or base.startswith("\\\\"):
        return ntpath.join(base, *parts)
    return posixpath.join(base, *parts)


class DialectTranslator(ABC):
    """Produces the alternate-dialect spelling of a path, if it has one."""
    
    @abstractmethod
    def alternate(self, path: str) -> Optional[CandidatePath]:
        """
        Translate a path into the other dialect.
        
        :param path: Path in either dialect
        :return: CandidatePath in the other dialect, or None when there is none
        """
        pass
    
    def dialect_of(self, path: str) -> PathDialect:
        """Dialect a path is written in."""
        return PathDialect.NATIVE
    
    def expand(self, path: str) -> List[CandidatePath]:
        """
        Return the path followed by its alternate spelling.
        
        :param path: Path in either dialect
        :return: One or two CandidatePath objects, given path first
        """
        candidates = [CandidatePath(path, self.dialect_of(path))]
        other = self.alternate(path)
        if other is not None and other.path != path:
            candidates.append(other)
        return candidates


class NullDialectTranslator(DialectTranslator):
    """Translator for hosts with a single path dialect."""
    
    def alternate(self, path: str) -> Optional[CandidatePath]:
        return None


class WslMountTranslator(DialectTranslator):
    """
    Maps drive-letter paths to their mount-point form and back.
    
    ``C:\\Users\\me`` <-> ``/mnt/c/Users/me``
    """
    
    def __init__(self, mount_root: str = "/mnt"):
        """
        :param mount_root: Directory under which drives are mounted
        """
        self.mount_root = mount_root.rstrip("/")
        self._mount_pattern = re.compile(
            rf"^{re.escape(self.mount_root)}/([A-Za-z])(?:/(.*))?$"
        )
    
    def dialect_of(self, path: str) -> PathDialect:
        if self._mount_pattern.match(path):
            return PathDialect.POSIX_MOUNT
        return PathDialect.NATIVE
    
    def alternate(self, path: str) -> Optional[CandidatePath]:
        drive = _DRIVE_PATH.match(path)
        if drive:
            letter, rest = drive.group(1).lower(), drive.group(2) or ""
            rest = rest.replace("\\", "/").strip("/")
            mounted = f"{self.mount_root}/{letter}"
            if rest:
                mounted = f"{mounted}/{rest}"
            return CandidatePath(mounted, PathDialect.POSIX_MOUNT)
        
        mount = self._mount_pattern.match(path)
        if mount:
            letter, rest = mount.group(1).upper(), mount.group(2) or ""
            rest = rest.replace("/", "\\").strip("\\")
            return CandidatePath(f"{letter}:\\{rest}", PathDialect.NATIVE)
        
        return None


def create_dialect_translator(
    setting: str = "auto",
    probe: Callable[[str], bool] = os.path.isdir,
) -> DialectTranslator:
    """
    Build the translator for a dialect setting.
    
    :param setting: 'wsl', 'none', or 'auto' (WSL when a Windows host or ``/mnt/c`` is present)
    :param probe: Directory check used by auto-detection
    :return: DialectTranslator instance
    """
    setting = setting.lower()
    if setting == "wsl":
        return WslMountTranslator()
    if setting == "none":
        return NullDialectTranslator()
    if setting != "auto":
        raise ValueError(f"Unknown dialect setting: {setting}")
    
    if os.name == "nt" or probe("/mnt/c"):
        logger.info("Drive mount dialect detected; emitting both path spellings")
        return WslMountTranslator()
    return NullDialectTranslator()
