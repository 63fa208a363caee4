"""
Reporters Layer - 报告层

包含 Rich 终端报告器和 JSON 报告器。
"""

from commit_gate.reporters.base import Reporter
from commit_gate.reporters.rich_reporter import RichReporter
from commit_gate.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "RichReporter",
    "JsonReporter",
]
