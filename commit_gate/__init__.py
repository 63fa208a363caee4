"""Commit-Gate: pre-commit quality gate for Node, Python, Go and Rust projects."""

__version__ = "0.3.0"

from commit_gate.checks.models import (
    CheckDefinition,
    CheckResult,
    CheckStatus,
    Ecosystem,
)
from commit_gate.gate import GateVerdict, aggregate, run_gate

__all__ = [
    "__version__",
    "CheckDefinition",
    "CheckResult",
    "CheckStatus",
    "Ecosystem",
    "GateVerdict",
    "aggregate",
    "run_gate",
]
