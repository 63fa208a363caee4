"""
报告器基类 - 定义报告器接口
"""

from typing import Protocol

from commit_gate.checks.models import CheckResult
from commit_gate.gate import GateVerdict


class Reporter(Protocol):
    """报告器协议"""

    def report_result(self, result: CheckResult) -> None:
        """单个检查完成时调用"""
        ...

    def report(self, verdict: GateVerdict, target: str) -> None:
        """生成最终报告"""
        ...
