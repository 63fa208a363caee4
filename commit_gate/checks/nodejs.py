"""Node.js checks: Prettier, ESLint, TypeScript, npm test."""

from commit_gate.checks.commands import staged_diff_grep
from commit_gate.checks.models import CheckDefinition, Ecosystem

JS_GLOBS = ["*.js", "*.jsx", "*.mjs", "*.cjs", "*.ts", "*.tsx"]

# `npm init` 生成的占位脚本总是以 1 退出，不算真正的测试
NPM_TEST = (
    "if grep -q '\"test\"[[:space:]]*:' package.json"
    " && ! grep -q 'no test specified' package.json; "
    "then npm test --silent; "
    "else echo 'no test script in package.json'; fi"
)

CHECKS: tuple[CheckDefinition, ...] = (
    CheckDefinition(
        name="Prettier",
        ecosystem=Ecosystem.NODE,
        command="prettier --check .",
        availability_probe="prettier",
    ),
    CheckDefinition(
        name="ESLint",
        ecosystem=Ecosystem.NODE,
        command="eslint .",
        availability_probe="eslint",
    ),
    CheckDefinition(
        name="TypeScript",
        ecosystem=Ecosystem.NODE,
        command="tsc --noEmit",
        availability_probe="tsc",
        required_file="tsconfig.json",
    ),
    CheckDefinition(
        name="Tests",
        ecosystem=Ecosystem.NODE,
        command=NPM_TEST,
        availability_probe="npm",
    ),
    CheckDefinition(
        name="Debug statements",
        ecosystem=Ecosystem.NODE,
        command=staged_diff_grep(JS_GLOBS, r"console\.log|debugger"),
        availability_probe="git",
        is_soft_failure=True,
    ),
)
