"""
数据模型定义

包含生态检测、检查注册表和检查执行器共用的数据类。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Ecosystem(Enum):
    """Project ecosystem, selected once per run from marker files."""
    NODE = "node"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    UNKNOWN = "unknown"


class CheckStatus(Enum):
    """Check outcome."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CheckDefinition:
    """
    检查定义（静态，运行期间不可变）

    Attributes:
        name: 检查名称，出现在报告中
        ecosystem: 所属生态
        command: 通过 shell 执行的命令
        availability_probe: 需要在 PATH 上找到的可执行文件名
        is_soft_failure: 失败时只警告，不阻止提交
        required_file: 相对于根目录必须存在的文件，缺失时跳过（例如 tsconfig.json）
    """
    name: str
    ecosystem: Ecosystem
    command: str
    availability_probe: str
    is_soft_failure: bool = False
    required_file: str = ""


@dataclass(frozen=True)
class CheckResult:
    """
    检查结果

    Attributes:
        check_name: 检查名称
        status: PASSED / FAILED / SKIPPED
        duration_ms: 耗时（毫秒）
        output_tail: 合并后 stdout/stderr 的最后几行
        is_soft_failure: 从 CheckDefinition 复制，供聚合器使用
        detail: 补充说明（跳过原因、超时等）
    """
    check_name: str
    status: CheckStatus
    duration_ms: int = 0
    output_tail: str = ""
    is_soft_failure: bool = False
    detail: str = ""

    @property
    def is_blocking(self) -> bool:
        """True when this result fails the gate."""
        return self.status is CheckStatus.FAILED and not self.is_soft_failure

    @property
    def label(self) -> str:
        """Status label used in the summary line."""
        if self.status is CheckStatus.PASSED:
            return "PASS"
        if self.status is CheckStatus.SKIPPED:
            return "SKIP"
        return "FAIL"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "check_name": self.check_name,
            "status": self.status.value,
            "label": self.label,
            "duration_ms": self.duration_ms,
            "output_tail": self.output_tail,
            "is_soft_failure": self.is_soft_failure,
            "detail": self.detail,
        }
