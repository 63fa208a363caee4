"""
CLI Layer - 命令行接口层

提供命令行入口和退出码映射。
"""

from commit_gate.cli.app import app, check, main

__all__ = [
    "app",
    "check",
    "main",
]
