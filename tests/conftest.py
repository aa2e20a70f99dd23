from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


ENV_VARS = (
    "PREFSTORE_DATA_DIR",
    "PREFSTORE_STORE_NAME",
    "PREFSTORE_PERSIST_TO_DISK",
    "PREFSTORE_APP_VERSION",
    "PREFSTORE_DEBUG_LOG_WRITES",
)


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect the data directory to a temp project directory so tests never touch real ./data.
    """
    import prefstore.paths as paths

    def _project_root() -> Path:
        return tmp_path

    def _data_dir() -> Path:
        p = tmp_path / "data"
        p.mkdir(parents=True, exist_ok=True)
        return p

    monkeypatch.setattr(paths, "project_root", _project_root)
    monkeypatch.setattr(paths, "data_dir", _data_dir)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def store():
    from prefstore.memory_store import MemoryFlatStore

    return MemoryFlatStore()


@pytest.fixture
def prefs(store):
    from prefstore.preferences import Preferences

    return Preferences(store, app_version=1)
