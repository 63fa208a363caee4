"""Child process executor.

This module provides command execution with:
- Combined stdout/stderr capture
- Per-command timeout
- Process-group kill on timeout or Ctrl-C
"""

import contextlib
import logging
import os
import signal
import subprocess
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

# 超长输出只保留末尾部分
MAX_OUTPUT_CHARS = 100_000


class ExecutionStatus(Enum):
    """Command execution status."""
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    SPAWN_ERROR = "spawn_error"


@dataclass
class ExecutionResult:
    """Result of command execution."""
    command: str
    exit_code: int
    output: str
    duration_ms: int
    status: ExecutionStatus


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _decode(raw: bytes | None) -> str:
    if not raw:
        return ""
    return raw.decode("utf-8", errors="replace")[-MAX_OUTPUT_CHARS:]


class ProcessExecutor:
    """Spawns shell commands one at a time and waits for them."""

    def execute(
        self,
        command: str,
        working_dir: Path,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> ExecutionResult:
        """
        Execute a command through ``/bin/sh``.

        Args:
            command: Command to execute
            working_dir: Working directory
            timeout: Seconds before the process group is killed (None or 0: no limit)
            env: Environment for the child (defaults to the current one)

        Returns:
            ExecutionResult with execution details

        Raises:
            KeyboardInterrupt: re-raised after the child process group is killed
        """
        start_time = time.monotonic()
        logger.debug(f"Running `{command}` in {working_dir}")

        try:
            proc = subprocess.Popen(
                command,
                shell=True,
                cwd=working_dir,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                # 独立进程组，超时时可以一并杀掉子进程
                start_new_session=True,
            )
        except OSError as e:
            return ExecutionResult(
                command=command,
                exit_code=-1,
                output=str(e),
                duration_ms=_elapsed_ms(start_time),
                status=ExecutionStatus.SPAWN_ERROR,
            )

        try:
            raw, _ = proc.communicate(timeout=timeout or None)
        except subprocess.TimeoutExpired:
            logger.warning(f"`{command}` timed out after {timeout} seconds, killing it")
            self._kill_group(proc)
            raw, _ = proc.communicate()
            return ExecutionResult(
                command=command,
                exit_code=-1,
                output=_decode(raw),
                duration_ms=_elapsed_ms(start_time),
                status=ExecutionStatus.TIMEOUT,
            )
        except KeyboardInterrupt:
            self._kill_group(proc)
            proc.wait()
            raise

        return ExecutionResult(
            command=command,
            exit_code=proc.returncode,
            output=_decode(raw),
            duration_ms=_elapsed_ms(start_time),
            status=ExecutionStatus.SUCCESS if proc.returncode == 0 else ExecutionStatus.FAILED,
        )

    @staticmethod
    def _kill_group(proc: subprocess.Popen) -> None:
        # 进程可能已经退出
        with contextlib.suppress(ProcessLookupError):
            os.killpg(proc.pid, signal.SIGKILL)
