"""Python checks: Black, Ruff, mypy, pytest."""

from commit_gate.checks.commands import staged_diff_grep
from commit_gate.checks.models import CheckDefinition, Ecosystem

CHECKS: tuple[CheckDefinition, ...] = (
    CheckDefinition(
        name="Black",
        ecosystem=Ecosystem.PYTHON,
        command="black --check --quiet .",
        availability_probe="black",
    ),
    CheckDefinition(
        name="Ruff",
        ecosystem=Ecosystem.PYTHON,
        command="ruff check .",
        availability_probe="ruff",
    ),
    CheckDefinition(
        name="mypy",
        ecosystem=Ecosystem.PYTHON,
        command="mypy .",
        availability_probe="mypy",
    ),
    CheckDefinition(
        name="pytest",
        ecosystem=Ecosystem.PYTHON,
        command="pytest -q",
        availability_probe="pytest",
    ),
    CheckDefinition(
        name="Debug statements",
        ecosystem=Ecosystem.PYTHON,
        command=staged_diff_grep(
            ["*.py"],
            r"(^|[^[:alnum:]_.])print\(|breakpoint\(\)|import pdb|pdb\.set_trace\(",
        ),
        availability_probe="git",
        is_soft_failure=True,
    ),
)
