"""Process execution module.

Runs check commands as child processes with a timeout and
process-group cleanup.
"""

from commit_gate.sandbox.executor import (
    ExecutionResult,
    ExecutionStatus,
    ProcessExecutor,
)

__all__ = [
    "ExecutionResult",
    "ExecutionStatus",
    "ProcessExecutor",
]
