"""Tests for launching Claude Code and creating projects."""

import subprocess
from unittest.mock import patch

import pytest

from claude_launchpad.services.launcher import (
    LaunchError,
    ProjectCreationError,
    create_project,
    launch_claude,
)


class TestLaunchClaude:
    @patch("claude_launchpad.services.launcher.subprocess.run")
    def test_runs_in_project_dir(self, mock_run, tmp_path):
        mock_run.return_value = subprocess.CompletedProcess(["claude"], 3)
        assert launch_claude(str(tmp_path)) == 3
        mock_run.assert_called_once_with(["claude"], cwd=str(tmp_path))

    @patch("claude_launchpad.services.launcher.subprocess.run", side_effect=FileNotFoundError("claude"))
    def test_missing_cli(self, mock_run, tmp_path):
        with pytest.raises(LaunchError, match="Failed to launch claude"):
            launch_claude(str(tmp_path))


class TestCreateProject:
    def test_creates_directory(self, tmp_path):
        path = create_project("demo", str(tmp_path))
        assert path == str(tmp_path / "demo")
        assert (tmp_path / "demo").is_dir()

    def test_existing_directory_is_fine(self, tmp_path):
        (tmp_path / "demo").mkdir()
        assert create_project("demo", str(tmp_path)) == str(tmp_path / "demo")

    def test_expands_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "code").mkdir()
        assert create_project("demo", "~/code") == str(tmp_path / "code" / "demo")

    def test_no_base_dir(self):
        with pytest.raises(ProjectCreationError, match="No base directory set"):
            create_project("demo", "")

    def test_missing_base_dir(self, tmp_path):
        with pytest.raises(ProjectCreationError, match="does not exist"):
            create_project("demo", str(tmp_path / "nope"))

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b"])
    def test_invalid_names(self, tmp_path, name):
        with pytest.raises(ProjectCreationError, match="Invalid project name"):
            create_project(name, str(tmp_path))
