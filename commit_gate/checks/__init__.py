"""Check definitions and the ecosystem check registry.

Per-ecosystem tables live in ``nodejs``, ``python``, ``golang`` and ``rust``.
"""

from commit_gate.checks.models import (
    CheckDefinition,
    CheckResult,
    CheckStatus,
    Ecosystem,
)
from commit_gate.checks.registry import CheckRegistry

__all__ = [
    "CheckDefinition",
    "CheckRegistry",
    "CheckResult",
    "CheckStatus",
    "Ecosystem",
]
