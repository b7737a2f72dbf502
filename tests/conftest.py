import time
from pathlib import Path

import pytest

from agentdesk.config import Settings
from agentdesk.storage import WorkspaceStore


class FakeClock:
    """Millisecond clock that never returns the same value twice.

    With a ``start`` it is a plain counter advancing by ``step``. Without
    one it follows wall-clock time so file modification times compare
    sensibly against index timestamps.
    """

    def __init__(self, start: int | None = None, step: int = 1):
        self.step = step
        self.last = None if start is None else start - step
        self.wall = start is None

    def __call__(self) -> int:
        value = self.last + self.step if self.last is not None else int(time.time() * 1000)
        if self.wall:
            value = max(value, int(time.time() * 1000))
        self.last = value
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path, clock):
    store = WorkspaceStore(tmp_path / "index" / "agentdesk.db", clock=clock)
    store.initialize()
    return store


@pytest.fixture
def workspace(tmp_path) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def settings(tmp_path, workspace) -> Settings:
    return Settings(workspace_path=workspace, database_path=tmp_path / "index" / "agentdesk.db")


def write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
