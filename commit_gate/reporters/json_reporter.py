"""
JSON 报告器 - 输出 JSON 格式报告
"""

import json
import sys
from typing import TextIO

from commit_gate.checks.models import CheckResult
from commit_gate.gate import GateVerdict


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report_result(self, result: CheckResult) -> None:
        """JSON 只在最后整体输出"""
        pass

    def report(self, verdict: GateVerdict, target: str) -> None:
        """生成 JSON 格式报告"""
        report_data = {"target": target, **verdict.to_dict()}
        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
