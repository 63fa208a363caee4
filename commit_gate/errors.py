"""
错误类型定义

检查级别的问题（工具缺失、检查失败、超时）不会抛出异常，
只有配置错误和内部错误才会中止整个运行。
"""


class GateError(Exception):
    """Commit-Gate 错误基类"""
    pass


class ConfigError(GateError):
    """配置文件无效"""
    pass


class DiffUnavailableError(GateError):
    """无法读取暂存区 diff（不是 git 仓库或 git 命令失败）"""
    pass
