from __future__ import annotations

from pathlib import Path


def project_root() -> Path:
    # prefstore/paths.py -> prefstore -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    return ensure_dir(project_root() / "data")


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def prefs_dir(data_dir: Path) -> Path:
    return ensure_dir(data_dir / "prefs")


def store_path(data_dir: Path, store_name: str) -> Path:
    safe = (store_name.strip() or "default").replace("/", "_")
    return prefs_dir(data_dir) / f"{safe}.json"
