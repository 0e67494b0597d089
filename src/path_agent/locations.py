"""
Well-known base directories for the current user.

Every static table and every scan is anchored on these paths, so tests can
point the whole resolver at a temporary home directory.
"""
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from .config import PathAgentConfig
from .dialects import is_drive_path, join_path


@dataclass(frozen=True)
class KnownLocations:
    """
    Base directories in the host's native dialect.
    
    Attributes:
        home: User's home directory
        username: Account name mentioned to the inference backend
        project_root: Root of the user's main project workspace
    """
    home: str
    username: str
    project_root: str
    
    @classmethod
    def from_config(cls, config: PathAgentConfig) -> "KnownLocations":
        """
        Derive locations from configuration, falling back to the current user.
        
        :param config: PathAgentConfig instance
        :return: KnownLocations instance
        """
        home = config.home_dir or os.path.expanduser("~")
        username = config.username or _basename(home) or "user"
        project_root = config.project_root or join_path(home, "projects")
        return cls(home=home, username=username, project_root=project_root)
    
    @property
    def is_drive_style(self) -> bool:
        """True when the home directory uses drive-letter paths."""
        return is_drive_path(self.home)
    
    @property
    def drive_root(self) -> str:
        """Root of the drive holding the home directory (``C:\\`` or ``/``)."""
        if self.is_drive_style:
            return self.home[:2].upper() + "\\"
        return "/"
    
    def under_home(self, *parts: str) -> str:
        return join_path(self.home, *parts)
    
    def under_project(self, *parts: str) -> str:
        return join_path(self.project_root, *parts)
    
    def under_root(self, *parts: str) -> str:
        return join_path(self.drive_root, *parts)
    
    @property
    def desktop(self) -> str:
        return self.under_home("Desktop")
    
    @property
    def documents(self) -> str:
        return self.under_home("Documents")
    
    @property
    def downloads(self) -> str:
        return self.under_home("Downloads")
    
    @property
    def pictures(self) -> str:
        return self.under_home("Pictures")
    
    @property
    def music(self) -> str:
        return self.under_home("Music")
    
    @property
    def videos(self) -> str:
        return self.under_home("Videos")
    
    def user_folders(self) -> Dict[str, str]:
        """
        Named folders inside the home directory.
        
        :return: Mapping of folder kind to native path
        """
        folders = {
            "home": self.home,
            "desktop": self.desktop,
            "documents": self.documents,
            "downloads": self.downloads,
            "pictures": self.pictures,
            "music": self.music,
            "videos": self.videos,
            "kakaotalk": join_path(self.documents, "카카오톡 받은 파일"),
        }
        if self.is_drive_style:
            folders.update({
                "appdata": self.under_home("AppData"),
                "appdata_local": self.under_home("AppData", "Local"),
                "appdata_roaming": self.under_home("AppData", "Roaming"),
                "temp": self.under_home("AppData", "Local", "Temp"),
            })
        else:
            folders.update({
                "appdata": self.under_home(".config"),
                "appdata_local": self.under_home(".local", "share"),
                "appdata_roaming": self.under_home(".config"),
                "temp": "/tmp",
            })
        return folders
    
    def system_folders(self) -> Dict[str, str]:
        """
        Operating-system folders, only those that exist on this kind of host.
        
        :return: Mapping of folder kind to native path
        """
        if self.is_drive_style:
            program_files = self.under_root("Program Files")
            program_files_x86 = self.under_root("Program Files (x86)")
            windows = self.under_root("Windows")
            public = self.under_root("Users", "Public")
            return {
                "recycle_bin": self.under_root("$Recycle.Bin"),
                "program_files": program_files,
                "program_files_x86": program_files_x86,
                "windows": windows,
                "system32": join_path(windows, "System32"),
                "syswow64": join_path(windows, "SysWOW64"),
                "system_temp": join_path(windows, "Temp"),
                "steam_apps": join_path(program_files_x86, "Steam", "steamapps", "common"),
                "steam": join_path(program_files_x86, "Steam"),
                "common_files": join_path(program_files, "Common Files"),
                "program_data": self.under_root("ProgramData"),
                "inetpub": self.under_root("inetpub"),
                "public": public,
                "public_desktop": join_path(public, "Desktop"),
                "public_documents": join_path(public, "Documents"),
            }
        return {
            "recycle_bin": self.under_home(".local", "share", "Trash"),
            "program_files": "/usr/bin",
            "program_files_x86": "/usr/local/bin",
            "windows": "/usr",
            "system32": "/usr/bin",
            "system_temp": "/tmp",
            "common_files": "/usr/share",
            "program_data": "/var/lib",
        }
    
    def labelled_dirs(self) -> Dict[str, str]:
        """Base directories described to the inference backend."""
        return {
            "desktop": self.desktop,
            "downloads": self.downloads,
            "documents": self.documents,
            "pictures": self.pictures,
            "music": self.music,
            "videos": self.videos,
            "project": self.project_root,
        }
    
    def discovery_bases(self) -> List[str]:
        """Directories scanned live for folders matching a query, in priority order."""
        return [self.desktop, self.documents, self.downloads, self.pictures, self.project_root]
    
    def get(self, kind: str) -> Optional[str]:
        """Look up a user or system folder by kind."""
        if kind == "project_root":
            return self.project_root
        return self.user_folders().get(kind) or self.system_folders().get(kind)


def _basename(path: str) -> str:
    return path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
