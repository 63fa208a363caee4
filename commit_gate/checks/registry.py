"""Ecosystem-keyed check registry.

Each ecosystem module exposes a static ``CHECKS`` tuple ordered
format → lint → type-check → test → advisory checks. Adding an
ecosystem means adding a table here, not another branch in the runner.
"""

from collections.abc import Mapping
from types import MappingProxyType

from commit_gate.checks import golang, nodejs, python, rust
from commit_gate.checks.models import CheckDefinition, Ecosystem


class CheckRegistry:
    """Read-only table mapping each ecosystem to its ordered checks."""

    def __init__(self, table: Mapping[Ecosystem, tuple[CheckDefinition, ...]]):
        for ecosystem, checks in table.items():
            for definition in checks:
                if definition.ecosystem is not ecosystem:
                    raise ValueError(
                        f"Check '{definition.name}' belongs to {definition.ecosystem.value}, "
                        f"registered under {ecosystem.value}"
                    )
        self._table = MappingProxyType({eco: tuple(checks) for eco, checks in table.items()})

    @classmethod
    def default(cls) -> "CheckRegistry":
        """Registry with the built-in Node, Python, Go and Rust tables."""
        return cls({
            Ecosystem.NODE: nodejs.CHECKS,
            Ecosystem.PYTHON: python.CHECKS,
            Ecosystem.GO: golang.CHECKS,
            Ecosystem.RUST: rust.CHECKS,
        })

    def checks_for(self, ecosystem: Ecosystem) -> tuple[CheckDefinition, ...]:
        """Return the ordered checks for ``ecosystem`` (empty for UNKNOWN)."""
        return self._table.get(ecosystem, ())

    def check_names(self) -> set[str]:
        """All registered check names, lower-cased."""
        return {d.name.lower() for checks in self._table.values() for d in checks}
