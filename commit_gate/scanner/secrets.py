"""
密钥扫描器

对暂存区 diff 的新增行做启发式匹配。这是尽力而为的提示，不是安全保证：
漏报（混淆过的密钥）和误报（包含 "token" 的普通字符串）都是预期内的。
"""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

import pathspec

from commit_gate.scanner.patterns import (
    ALLOW_LIST_PATTERN,
    DIFF_FILE_HEADER,
    DIFF_HUNK_HEADER,
    SECRET_PATTERNS,
)

logger = logging.getLogger(__name__)

# 报告中保留的密钥明文字符数
VISIBLE_CHARS = 6


@dataclass(frozen=True)
class SecretFinding:
    """
    疑似密钥

    Attributes:
        file_path: 文件路径（纯文本输入时为空）
        line_number: 新文件中的行号 (1-based)
        pattern_name: 命中的模式名称
        line: 打码后的行内容
    """
    file_path: str
    line_number: int
    pattern_name: str
    line: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "line_number": self.line_number,
            "pattern_name": self.pattern_name,
            "line": self.line,
        }


def _masked(secret: str) -> str:
    return secret[:min(VISIBLE_CHARS, len(secret) // 2)] + "****"


def mask(line: str, patterns: list[tuple[str, re.Pattern]]) -> str:
    """Mask every match of every pattern in ``line``, keeping a short visible prefix of each."""
    for _, pattern in patterns:
        line = pattern.sub(lambda m: _masked(m.group(0)), line)
    return line


def iter_added_lines(diff_text: str) -> Iterator[tuple[str, int, str]]:
    """
    Yield ``(file_path, line_number, content)`` for each added line.

    Text without any diff structure is treated as a plain file: every line
    counts as added.
    """
    lines = diff_text.splitlines()
    is_diff = any(line.startswith(("diff --git", "@@", "+++ ")) for line in lines)

    if not is_diff:
        for number, line in enumerate(lines, 1):
            yield "", number, line
        return

    file_path = ""
    new_line_number = 0
    for line in lines:
        header = DIFF_FILE_HEADER.match(line)
        if header:
            file_path = header.group(1)
            continue
        hunk = DIFF_HUNK_HEADER.match(line)
        if hunk:
            new_line_number = int(hunk.group(1))
            continue
        if line.startswith("+"):
            yield file_path, new_line_number, line[1:]
            new_line_number += 1
        elif line.startswith(" "):
            new_line_number += 1


class SecretScanner:
    """Pattern-based secret detector for staged diff text."""

    def __init__(
        self,
        exclude: Iterable[str] = (),
        patterns: list[tuple[str, re.Pattern]] | None = None,
    ):
        """
        Args:
            exclude: gitignore-style patterns for files that are not scanned
            patterns: (name, regex) pairs; defaults to SECRET_PATTERNS
        """
        self.patterns = patterns if patterns is not None else SECRET_PATTERNS
        self._exclude_spec = pathspec.PathSpec.from_lines("gitwildmatch", list(exclude))

    def is_excluded(self, file_path: str) -> bool:
        return bool(file_path) and self._exclude_spec.match_file(file_path)

    def find_secrets(self, diff_text: str) -> list[SecretFinding]:
        """Return one finding per suspicious added line."""
        findings: list[SecretFinding] = []
        for file_path, line_number, content in iter_added_lines(diff_text):
            if self.is_excluded(file_path):
                continue
            if ALLOW_LIST_PATTERN.search(content):
                continue
            stripped = content.strip()
            name = next((n for n, p in self.patterns if p.search(stripped)), None)
            if name is None:
                continue
            # 每行只报告一次，但行内所有命中都要打码
            findings.append(SecretFinding(
                file_path=file_path,
                line_number=line_number,
                pattern_name=name,
                line=mask(stripped, self.patterns),
            ))

        if findings:
            logger.debug(f"{len(findings)} suspected secret(s) in staged diff")
        return findings

    def scan(self, diff_text: str) -> bool:
        """True when at least one secret is suspected."""
        return bool(self.find_secrets(diff_text))


def scan(staged_diff_text: str) -> bool:
    """Scan with the default patterns and no path exclusions."""
    return SecretScanner().scan(staged_diff_text)
