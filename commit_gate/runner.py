"""Check runner.

Probes a check's tool, runs its command and classifies the outcome
as passed, failed or skipped.
"""

import logging
import os
import shutil

from commit_gate.checks.models import CheckDefinition, CheckResult, CheckStatus
from commit_gate.config import GateConfig
from commit_gate.sandbox.executor import ExecutionStatus, ProcessExecutor

logger = logging.getLogger(__name__)


def tail_lines(text: str, count: int) -> str:
    """Return the last ``count`` non-trailing-blank lines of ``text``."""
    if count <= 0:
        return ""
    lines = text.rstrip().splitlines()
    return "\n".join(lines[-count:])


class CheckRunner:
    """Runs one check at a time for a fixed configuration."""

    def __init__(self, config: GateConfig, executor: ProcessExecutor | None = None):
        self.config = config
        self.executor = executor or ProcessExecutor()
        self._env = dict(os.environ)
        self._env["PATH"] = config.search_path(os.environ.get("PATH", ""))

    def is_available(self, definition: CheckDefinition) -> bool:
        """Whether the check's probe executable is on the search path."""
        return shutil.which(definition.availability_probe, path=self._env["PATH"]) is not None

    def run(self, definition: CheckDefinition) -> CheckResult:
        """
        Run a single check.

        Args:
            definition: Check to run

        Returns:
            CheckResult; never raises for tool problems

        Raises:
            KeyboardInterrupt: the user interrupted the running command
        """
        soft = definition.is_soft_failure or self.config.is_soft(definition.name)

        if self.config.is_skipped(definition.name):
            return CheckResult(
                check_name=definition.name,
                status=CheckStatus.SKIPPED,
                is_soft_failure=soft,
                detail="skipped by configuration",
            )

        if not self.is_available(definition):
            logger.info(f"{definition.availability_probe} not found, skipping {definition.name}")
            return CheckResult(
                check_name=definition.name,
                status=CheckStatus.SKIPPED,
                is_soft_failure=soft,
                detail=f"{definition.availability_probe} not found",
            )

        if definition.required_file and not (self.config.root / definition.required_file).is_file():
            logger.info(f"{definition.required_file} not found, skipping {definition.name}")
            return CheckResult(
                check_name=definition.name,
                status=CheckStatus.SKIPPED,
                is_soft_failure=soft,
                detail=f"{definition.required_file} not found",
            )

        execution = self.executor.execute(
            definition.command,
            self.config.root,
            timeout=self.config.timeout_seconds,
            env=self._env,
        )
        output_tail = tail_lines(execution.output, self.config.output_tail_lines)

        if execution.status is ExecutionStatus.SUCCESS:
            status = CheckStatus.PASSED
            detail = ""
        elif execution.status is ExecutionStatus.TIMEOUT:
            status = CheckStatus.FAILED
            detail = f"timed out after {self.config.timeout_seconds}s"
        elif execution.status is ExecutionStatus.SPAWN_ERROR:
            status = CheckStatus.FAILED
            detail = f"could not start: {execution.output}"
        else:
            status = CheckStatus.FAILED
            detail = f"exit code {execution.exit_code}"

        return CheckResult(
            check_name=definition.name,
            status=status,
            duration_ms=execution.duration_ms,
            output_tail=output_tail,
            is_soft_failure=soft,
            detail=detail,
        )
