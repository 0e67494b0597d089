"""
Shared fixtures: in-memory filesystem, scripted inference backends and a
controllable clock, so resolver tests never touch the real disk or network.
"""
import asyncio
import json
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pytest

from path_agent.config import PathAgentConfig
from path_agent.dialects import NullDialectTranslator, WslMountTranslator
from path_agent.filesystem import DirEntry, FileSystemGateway
from path_agent.inference.backend import InferenceBackend
from path_agent.locations import KnownLocations
from path_agent.resolution.resolver_factory import create_orchestrator
from path_agent.state import ResolverState

HOME = "C:\\Users\\tester"
DESKTOP = "C:\\Users\\tester\\Desktop"
DOCUMENTS = "C:\\Users\\tester\\Documents"
PROJECT = "D:\\work"


class FakeFileSystem(FileSystemGateway):
    """In-memory filesystem; counts list_dir calls per directory."""

    def __init__(
        self,
        tree: Optional[Mapping[str, Sequence[Tuple[str, bool]]]] = None,
        files: Iterable[str] = (),
    ):
        self.tree: Dict[str, List[Tuple[str, bool]]] = {k: list(v) for k, v in (tree or {}).items()}
        self.files = set(files)
        self.list_calls: Dict[str, int] = {}

    def add_dir(self, parent: str, name: str) -> None:
        self.tree.setdefault(parent, []).append((name, True))

    def list_dir(self, path: str) -> List[DirEntry]:
        self.list_calls[path] = self.list_calls.get(path, 0) + 1
        if path not in self.tree:
            raise FileNotFoundError(path)
        sep = "\\" if "\\" in path else "/"
        return [
            DirEntry(name=name, path=f"{path.rstrip(sep)}{sep}{name}", is_dir=is_dir)
            for name, is_dir in self.tree[path]
        ]

    def exists(self, path: str) -> bool:
        if path in self.files or path in self.tree:
            return True
        for parent, children in self.tree.items():
            for name, _ in children:
                for sep in ("\\", "/"):
                    if f"{parent.rstrip(sep)}{sep}{name}" == path:
                        return True
        return False


class ScriptedBackend(InferenceBackend):
    """Returns a fixed reply (or raises) and counts calls."""

    name = "scripted"

    def __init__(self, reply="[]", delay: float = 0.0, error: Optional[Exception] = None):
        self.reply = reply
        self.delay = delay
        self.error = error
        self.call_count = 0
        self.last_known_dirs: Optional[Mapping[str, str]] = None

    async def ainfer(self, query: str, known_dirs: Mapping[str, str]) -> str:
        self.call_count += 1
        self.last_known_dirs = dict(known_dirs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, str):
            return self.reply
        return json.dumps(self.reply)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def drive_config():
    """Configuration for a drive-letter home directory."""
    return PathAgentConfig(
        home_dir=HOME,
        username="tester",
        project_root=PROJECT,
        dialect="wsl",
        inference_backend="simulated",
        ai_timeout_seconds=0.2,
    )


@pytest.fixture
def locations(drive_config):
    return KnownLocations.from_config(drive_config)


@pytest.fixture
def wsl():
    return WslMountTranslator()


@pytest.fixture
def null_translator():
    return NullDialectTranslator()


@pytest.fixture
def fake_fs():
    return FakeFileSystem()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def build_orchestrator(drive_config, wsl, clock):
    """Build an orchestrator around a given filesystem and backend."""
    def _build(filesystem, backend, config=None):
        config = config or drive_config
        state = ResolverState.from_config(config, clock=clock, wall_clock=clock)
        orchestrator = create_orchestrator(
            config=config,
            state=state,
            filesystem=filesystem,
            translator=wsl,
            backend=backend,
        )
        return orchestrator, state
    return _build
