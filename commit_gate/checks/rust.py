"""Rust checks: rustfmt, Clippy, cargo check, cargo test."""

from commit_gate.checks.commands import staged_diff_grep
from commit_gate.checks.models import CheckDefinition, Ecosystem

CHECKS: tuple[CheckDefinition, ...] = (
    CheckDefinition(
        name="rustfmt",
        ecosystem=Ecosystem.RUST,
        command="cargo fmt --all -- --check",
        availability_probe="cargo-fmt",
    ),
    CheckDefinition(
        name="Clippy",
        ecosystem=Ecosystem.RUST,
        command="cargo clippy --all-targets -- -D warnings",
        availability_probe="cargo-clippy",
    ),
    CheckDefinition(
        name="cargo check",
        ecosystem=Ecosystem.RUST,
        command="cargo check --all-targets",
        availability_probe="cargo",
    ),
    CheckDefinition(
        name="cargo test",
        ecosystem=Ecosystem.RUST,
        command="cargo test",
        availability_probe="cargo",
    ),
    CheckDefinition(
        name="Debug statements",
        ecosystem=Ecosystem.RUST,
        command=staged_diff_grep(["*.rs"], r"dbg!\(|println!\("),
        availability_probe="git",
        is_soft_failure=True,
    ),
)
