"""
Read-only filesystem access used by discovery and verification.

The resolver only ever lists directories and checks existence; it never writes.
"""
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class DirEntry:
    """One child of a listed directory."""
    name: str
    path: str
    is_dir: bool


class FileSystemGateway(ABC):
    """Minimal filesystem surface the resolver depends on."""
    
    @abstractmethod
    def list_dir(self, path: str) -> List[DirEntry]:
        """
        List the immediate children of a directory.
        
        :param path: Directory to list
        :return: Child entries
        :raises: OSError if the directory cannot be read
        """
        pass
    
    @abstractmethod
    def exists(self, path: str) -> bool:
        """Whether anything exists at ``path``."""
        pass


class LocalFileSystem(FileSystemGateway):
    """Gateway backed by the host filesystem."""
    
    def list_dir(self, path: str) -> List[DirEntry]:
        entries = []
        with os.scandir(path) as iterator:
            for entry in iterator:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    # Broken links and permission errors count as "not a folder"
                    is_dir = False
                entries.append(DirEntry(name=entry.name, path=entry.path, is_dir=is_dir))
        return entries
    
    def exists(self, path: str) -> bool:
        return os.path.exists(path)
