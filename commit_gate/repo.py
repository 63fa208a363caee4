"""
仓库访问 - 读取暂存区 diff

使用 GitPython 调用 `git diff --cached`。
"""

import logging
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from commit_gate.errors import DiffUnavailableError

logger = logging.getLogger(__name__)


def open_repository(root: Path) -> Repo:
    """
    打开 root 所在的 git 仓库（向上查找 .git）

    Raises:
        DiffUnavailableError: root 不在 git 工作区内
    """
    try:
        return Repo(root, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise DiffUnavailableError(f"{root} is not inside a git work tree") from e


def staged_diff(root: Path) -> str:
    """
    Return the staged diff text (``git diff --cached``) for the repository at ``root``.

    Raises:
        DiffUnavailableError: not a git work tree, or git failed
    """
    repo = open_repository(root)
    try:
        return repo.git.diff("--cached", "--no-color", "--no-ext-diff", "-U0")
    except GitCommandError as e:
        raise DiffUnavailableError(f"git diff --cached failed: {e}") from e
    finally:
        repo.close()
