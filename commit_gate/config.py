"""
配置加载

优先级（从低到高）：
1. 内置默认值
2. pyproject.toml 中的 [tool.commit-gate]
3. 仓库根目录的 .commit-gate.toml
4. 命令行参数
"""

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from commit_gate.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = ".commit-gate.toml"
PYPROJECT_TABLE = "commit-gate"

# 锁文件中的哈希值容易误报
DEFAULT_SECRET_EXCLUDE: tuple[str, ...] = (
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "poetry.lock",
    "Cargo.lock",
    "go.sum",
)

# 项目本地安装的工具目录，相对于仓库根目录
DEFAULT_EXTRA_PATH: tuple[str, ...] = (
    "node_modules/.bin",
    ".venv/bin",
    "venv/bin",
)


@dataclass(frozen=True)
class GateConfig:
    """
    Gate 配置（不可变，显式传入各组件）

    Attributes:
        root: 仓库根目录
        timeout_seconds: 单个检查的超时时间，0 表示不限制
        output_tail_lines: 失败检查保留的输出行数
        skip: 不执行的检查名称（小写），结果记为 SKIPPED
        soft: 额外视为软失败的检查名称（小写）
        secret_exclude: 不做密钥扫描的路径模式（gitignore 语法）
        extra_path: 探测和执行工具时追加到 PATH 前面的目录
    """
    root: Path
    timeout_seconds: int = 300
    output_tail_lines: int = 20
    skip: frozenset[str] = frozenset()
    soft: frozenset[str] = frozenset()
    secret_exclude: tuple[str, ...] = DEFAULT_SECRET_EXCLUDE
    extra_path: tuple[str, ...] = DEFAULT_EXTRA_PATH

    def is_skipped(self, check_name: str) -> bool:
        return check_name.lower() in self.skip

    def is_soft(self, check_name: str) -> bool:
        return check_name.lower() in self.soft

    def search_path(self, base_path: str) -> str:
        """PATH value with ``extra_path`` entries (resolved against root) prepended."""
        extra = [str(self.root / p) for p in self.extra_path]
        parts = extra + ([base_path] if base_path else [])
        return os.pathsep.join(parts)


# 配置文件中允许的键及其类型
_FILE_KEYS: dict[str, type] = {
    "timeout_seconds": int,
    "output_tail_lines": int,
    "skip": list,
    "soft": list,
    "secret_exclude": list,
    "extra_path": list,
}


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e


def _validate(values: dict[str, Any], source: Path) -> dict[str, Any]:
    """Check keys and value types, converting lists to the dataclass field types."""
    result: dict[str, Any] = {}
    for key, value in values.items():
        normalized = key.replace("-", "_")
        expected = _FILE_KEYS.get(normalized)
        if expected is None:
            raise ConfigError(f"Unknown option '{key}' in {source}")
        # bool 是 int 的子类，需要单独排除
        if not isinstance(value, expected) or isinstance(value, bool):
            raise ConfigError(
                f"Option '{key}' in {source} must be of type {expected.__name__}"
            )
        if expected is int and value < 0:
            raise ConfigError(f"Option '{key}' in {source} must not be negative")
        if expected is list:
            if not all(isinstance(item, str) for item in value):
                raise ConfigError(f"Option '{key}' in {source} must be a list of strings")
            if normalized in ("skip", "soft"):
                value = frozenset(item.lower() for item in value)
            else:
                value = tuple(value)
        result[normalized] = value
    return result


def load_file_options(root: Path) -> dict[str, Any]:
    """Collect options from pyproject.toml and .commit-gate.toml under ``root``."""
    options: dict[str, Any] = {}

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        table = _read_toml(pyproject).get("tool", {}).get(PYPROJECT_TABLE)
        if table is not None:
            if not isinstance(table, dict):
                raise ConfigError(f"[tool.{PYPROJECT_TABLE}] in {pyproject} must be a table")
            logger.debug(f"Loading options from {pyproject}")
            options.update(_validate(table, pyproject))

    config_file = root / CONFIG_FILE
    if config_file.is_file():
        logger.debug(f"Loading options from {config_file}")
        options.update(_validate(_read_toml(config_file), config_file))

    return options


def load_config(
    root: Path,
    timeout_seconds: int | None = None,
    skip: list[str] | None = None,
    soft: list[str] | None = None,
) -> GateConfig:
    """
    Build the run configuration for ``root``.

    Command-line values override file values; ``skip`` and ``soft`` from the
    command line are added to those from files rather than replacing them.

    Raises:
        ConfigError: a config file is unreadable or has invalid options
    """
    config = replace(GateConfig(root=root), **load_file_options(root))

    overrides: dict[str, Any] = {}
    if timeout_seconds is not None:
        if timeout_seconds < 0:
            raise ConfigError("Timeout must not be negative")
        overrides["timeout_seconds"] = timeout_seconds
    if skip:
        overrides["skip"] = config.skip | {name.lower() for name in skip}
    if soft:
        overrides["soft"] = config.soft | {name.lower() for name in soft}

    return replace(config, **overrides)
