import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from commit_gate.config import GateConfig

MakeTool = Callable[[str, str], Path]


@pytest.fixture
def bin_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A directory of fake tools that is the only entry on PATH."""
    directory = tmp_path / "bin"
    directory.mkdir()
    monkeypatch.setenv("PATH", str(directory))
    return directory


@pytest.fixture
def make_tool(bin_dir: Path) -> MakeTool:
    """Write an executable shell script named ``name`` into ``bin_dir``."""

    def _make_tool(name: str, body: str) -> Path:
        tool = bin_dir / name
        tool.write_text(f"#!/bin/sh\n{body}\n")
        tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return tool

    return _make_tool


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def config(project: Path) -> GateConfig:
    return GateConfig(root=project, extra_path=())


def no_diff(root: Path) -> str:
    return ""
