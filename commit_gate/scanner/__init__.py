"""Secret scanning of staged diff content."""

from commit_gate.scanner.secrets import SecretFinding, SecretScanner, scan

__all__ = [
    "SecretFinding",
    "SecretScanner",
    "scan",
]
