"""Go checks: gofmt, golangci-lint, go vet, go test."""

from commit_gate.checks.commands import staged_diff_grep
from commit_gate.checks.models import CheckDefinition, Ecosystem

CHECKS: tuple[CheckDefinition, ...] = (
    CheckDefinition(
        name="gofmt",
        ecosystem=Ecosystem.GO,
        # gofmt -l 总是返回 0，有输出即表示存在未格式化文件
        command='out="$(gofmt -l .)"; test -z "$out" || { echo "$out"; exit 1; }',
        availability_probe="gofmt",
    ),
    CheckDefinition(
        name="golangci-lint",
        ecosystem=Ecosystem.GO,
        command="golangci-lint run",
        availability_probe="golangci-lint",
    ),
    CheckDefinition(
        name="go vet",
        ecosystem=Ecosystem.GO,
        command="go vet ./...",
        availability_probe="go",
    ),
    CheckDefinition(
        name="go test",
        ecosystem=Ecosystem.GO,
        command="go test ./...",
        availability_probe="go",
    ),
    CheckDefinition(
        name="Debug statements",
        ecosystem=Ecosystem.GO,
        command=staged_diff_grep(["*.go"], r"fmt\.Print(ln|f)?\("),
        availability_probe="git",
        is_soft_failure=True,
    ),
)
