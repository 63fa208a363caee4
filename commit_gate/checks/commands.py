"""Shell command builders shared by the ecosystem check tables."""

import shlex

# 取出新增行（去掉 "+" 前缀，排除 "+++ b/file" 头）
ADDED_LINES = "grep '^+' | grep -v '^+++' | cut -c2-"


def staged_diff_grep(globs: list[str], pattern: str) -> str:
    """
    Build a command that fails when added lines of the staged diff match ``pattern``.

    ``pattern`` is a POSIX extended regex applied to the added line content.
    The pipeline exits 0 when nothing matches, so a clean diff passes; matching
    lines are printed and end up in the check's output tail.
    """
    pathspecs = " ".join(shlex.quote(g) for g in globs)
    return (
        f"! git diff --cached -U0 --no-color -- {pathspecs} "
        f"| {ADDED_LINES} | grep -E {shlex.quote(pattern)}"
    )
