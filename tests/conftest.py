"""Shared test fixtures for Claude Launchpad."""

from pathlib import Path

import pytest

from claude_launchpad.utils.path_codec import decode_path, encode_path


@pytest.fixture
def projects_root(tmp_path) -> Path:
    """An empty Claude projects directory."""
    root = tmp_path / ".claude" / "projects"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def state_dir(tmp_path, monkeypatch) -> Path:
    """Isolated launchpad state directory (cache, history, config)."""
    state = tmp_path / "cclp-home"
    monkeypatch.setenv("CCLP_HOME", str(state))
    return state


@pytest.fixture
def workspace(tmp_path) -> Path:
    """A real directory for project checkouts whose encoded name decodes back to it."""
    base = (tmp_path / "work").resolve()
    base.mkdir()
    if decode_path(encode_path(str(base))) != str(base):
        pytest.skip(f"temporary path {base} is ambiguous under the directory encoding")
    return base


@pytest.fixture
def make_project(workspace, projects_root):
    """Create a checkout under the workspace plus its encoded storage dir."""
    def _make(name: str) -> tuple[Path, Path]:
        checkout = workspace / name
        checkout.mkdir(parents=True, exist_ok=True)
        storage = projects_root / encode_path(str(checkout))
        storage.mkdir(exist_ok=True)
        return checkout, storage
    return _make
