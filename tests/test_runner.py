import os
import signal
import threading
import time
from dataclasses import replace
from pathlib import Path

import pytest

from commit_gate.checks import nodejs
from commit_gate.checks.models import CheckDefinition, CheckStatus, Ecosystem
from commit_gate.config import GateConfig
from commit_gate.runner import CheckRunner, tail_lines
from commit_gate.sandbox.executor import ExecutionStatus, ProcessExecutor

from conftest import MakeTool


def definition(name: str = "Lint", probe: str = "lint", command: str = "lint", soft: bool = False) -> CheckDefinition:
    return CheckDefinition(
        name=name,
        ecosystem=Ecosystem.NODE,
        command=command,
        availability_probe=probe,
        is_soft_failure=soft,
    )


def test_missing_tool_is_skipped_without_running(config: GateConfig, bin_dir: Path, project: Path) -> None:
    marker = project / "ran"
    result = CheckRunner(config).run(definition(probe="nope", command=f"touch {marker}"))

    assert result.status is CheckStatus.SKIPPED
    assert result.detail == "nope not found"
    assert not marker.exists()


def test_exit_zero_passes(config: GateConfig, make_tool: MakeTool) -> None:
    make_tool("lint", "echo all good")
    result = CheckRunner(config).run(definition())

    assert result.status is CheckStatus.PASSED
    assert result.label == "PASS"
    assert result.output_tail == "all good"
    assert not result.is_blocking


def test_nonzero_exit_fails_with_combined_output(config: GateConfig, make_tool: MakeTool) -> None:
    make_tool("lint", "echo 'src/a.js: bad' ; echo 'boom' >&2 ; exit 3")
    result = CheckRunner(config).run(definition())

    assert result.status is CheckStatus.FAILED
    assert result.detail == "exit code 3"
    assert "src/a.js: bad" in result.output_tail
    assert "boom" in result.output_tail
    assert result.is_blocking


def test_soft_failure_is_not_blocking(config: GateConfig, make_tool: MakeTool) -> None:
    make_tool("lint", "exit 1")
    result = CheckRunner(config).run(definition(soft=True))

    assert result.status is CheckStatus.FAILED
    assert result.is_soft_failure
    assert not result.is_blocking


def test_configured_soft_name(config: GateConfig, make_tool: MakeTool) -> None:
    make_tool("lint", "exit 1")
    runner = CheckRunner(replace(config, soft=frozenset({"lint"})))
    result = runner.run(definition(name="Lint"))

    assert result.is_soft_failure
    assert not result.is_blocking


def test_configured_skip(config: GateConfig, make_tool: MakeTool, project: Path) -> None:
    marker = project / "ran"
    make_tool("lint", f"touch {marker}")
    runner = CheckRunner(replace(config, skip=frozenset({"lint"})))
    result = runner.run(definition(name="LINT"))

    assert result.status is CheckStatus.SKIPPED
    assert result.detail == "skipped by configuration"
    assert not marker.exists()


def test_output_tail_is_limited(config: GateConfig, make_tool: MakeTool) -> None:
    make_tool("lint", "for i in 1 2 3 4 5 6; do echo line$i; done; exit 1")
    result = CheckRunner(replace(config, output_tail_lines=2)).run(definition())

    assert result.output_tail == "line5\nline6"


def test_command_runs_in_root(config: GateConfig, make_tool: MakeTool, project: Path) -> None:
    make_tool("lint", "pwd")
    result = CheckRunner(config).run(definition())

    assert Path(result.output_tail).resolve() == project.resolve()


def test_tools_found_in_extra_path(project: Path, bin_dir: Path) -> None:
    local_bin = project / "node_modules" / ".bin"
    local_bin.mkdir(parents=True)
    tool = local_bin / "eslint"
    tool.write_text("#!/bin/sh\nexit 0\n")
    tool.chmod(0o755)

    config = GateConfig(root=project, extra_path=("node_modules/.bin",))
    result = CheckRunner(config).run(definition(name="ESLint", probe="eslint", command="eslint ."))

    assert result.status is CheckStatus.PASSED


def test_timeout_fails_and_kills(project: Path, make_tool: MakeTool, monkeypatch: pytest.MonkeyPatch, bin_dir: Path) -> None:
    monkeypatch.setenv("PATH", f"{bin_dir}:/usr/bin:/bin")
    make_tool("slow", "echo started; sleep 30")
    config = GateConfig(root=project, extra_path=(), timeout_seconds=1)

    start = time.monotonic()
    result = CheckRunner(config).run(definition(name="Tests", probe="slow", command="slow"))

    assert time.monotonic() - start < 10
    assert result.status is CheckStatus.FAILED
    assert result.detail == "timed out after 1s"
    assert "started" in result.output_tail
    assert result.is_blocking


def test_executor_reports_status(project: Path) -> None:
    executor = ProcessExecutor()

    ok = executor.execute("echo hi", project)
    assert ok.status is ExecutionStatus.SUCCESS
    assert ok.exit_code == 0
    assert ok.output == "hi\n"

    failed = executor.execute("exit 7", project)
    assert failed.status is ExecutionStatus.FAILED
    assert failed.exit_code == 7


def test_executor_spawn_error(tmp_path: Path) -> None:
    result = ProcessExecutor().execute("echo hi", tmp_path / "missing")
    assert result.status is ExecutionStatus.SPAWN_ERROR
    assert result.exit_code == -1


def test_spawn_error_is_a_failure(tmp_path: Path, make_tool: MakeTool) -> None:
    make_tool("lint", "exit 0")
    config = GateConfig(root=tmp_path / "missing", extra_path=())
    result = CheckRunner(config).run(definition())

    assert result.status is CheckStatus.FAILED
    assert result.detail.startswith("could not start")


def test_tail_lines() -> None:
    assert tail_lines("a\nb\nc\n\n", 2) == "b\nc"
    assert tail_lines("a\nb", 0) == ""
    assert tail_lines("", 5) == ""


def _is_running(pid: int) -> bool:
    try:
        stat = Path(f"/proc/{pid}/stat").read_text()
    except FileNotFoundError:
        return False
    # 已退出但未被回收的进程状态为 Z
    return stat.rsplit(")", 1)[1].split()[0] != "Z"


@pytest.mark.skipif(not Path("/proc/self/stat").exists(), reason="needs /proc")
def test_interrupt_kills_background_children(project: Path) -> None:
    pid_file = project / "child.pid"
    timer = threading.Timer(1.0, os.kill, (os.getpid(), signal.SIGINT))
    timer.start()
    try:
        with pytest.raises(KeyboardInterrupt):
            ProcessExecutor().execute(f"sleep 30 & echo $! > {pid_file}; wait", project)
    finally:
        timer.cancel()

    pid = int(pid_file.read_text())
    deadline = time.monotonic() + 5
    while _is_running(pid) and time.monotonic() < deadline:
        time.sleep(0.05)
    assert not _is_running(pid)


def node_check(name: str) -> CheckDefinition:
    return next(c for c in nodejs.CHECKS if c.name == name)


def test_typescript_needs_tsconfig(config: GateConfig, make_tool: MakeTool, project: Path) -> None:
    make_tool("tsc", "echo 'error TS2304'; exit 2")
    runner = CheckRunner(config)

    result = runner.run(node_check("TypeScript"))
    assert result.status is CheckStatus.SKIPPED
    assert result.detail == "tsconfig.json not found"

    (project / "tsconfig.json").write_text("{}")
    result = runner.run(node_check("TypeScript"))
    assert result.status is CheckStatus.FAILED
    assert "error TS2304" in result.output_tail


@pytest.mark.parametrize(
    "package_json",
    [
        "{}",
        '{"scripts": {"test": "echo \\"Error: no test specified\\" && exit 1"}}',
    ],
)
def test_npm_placeholder_test_script_is_not_run(
    project: Path, make_tool: MakeTool, monkeypatch: pytest.MonkeyPatch, bin_dir: Path, package_json: str
) -> None:
    monkeypatch.setenv("PATH", f"{bin_dir}:/usr/bin:/bin")
    (project / "package.json").write_text(package_json)
    make_tool("npm", "echo 'npm ran'; exit 1")

    result = CheckRunner(GateConfig(root=project, extra_path=())).run(node_check("Tests"))

    assert result.status is CheckStatus.PASSED
    assert "npm ran" not in result.output_tail


def test_npm_real_test_script_runs(
    project: Path, make_tool: MakeTool, monkeypatch: pytest.MonkeyPatch, bin_dir: Path
) -> None:
    monkeypatch.setenv("PATH", f"{bin_dir}:/usr/bin:/bin")
    (project / "package.json").write_text('{"scripts": {"test": "jest"}}')
    make_tool("npm", "echo 'npm ran'; exit 1")

    result = CheckRunner(GateConfig(root=project, extra_path=())).run(node_check("Tests"))

    assert result.status is CheckStatus.FAILED
    assert "npm ran" in result.output_tail
