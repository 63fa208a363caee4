"""
CLI 入口模块 - 使用 Typer 构建命令行界面

退出码：
- 0: 所有阻断性检查通过且没有疑似密钥
- 1: 质量门禁拒绝提交
- 2: 内部错误（参数、配置或程序本身的问题）
- 130: 在检查之外被 Ctrl-C 中断（例如读取 diff 时）
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from commit_gate.config import load_config
from commit_gate.errors import GateError
from commit_gate.gate import run_gate
from commit_gate.reporters import JsonReporter, Reporter, RichReporter

EXIT_PASSED = 0
EXIT_REJECTED = 1
EXIT_INTERNAL_ERROR = 2
EXIT_INTERRUPTED = 130

# 创建 Typer 应用实例
app = typer.Typer(
    name="commit-gate",
    help="Commit-Gate: pre-commit quality gate (format, lint, type-check, test, secrets).",
    add_completion=False,
)

# 日志和错误输出到 stderr，stdout 只用于报告
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """配置日志输出"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        from commit_gate import __version__
        typer.echo(f"commit-gate {__version__}")
        raise typer.Exit(EXIT_PASSED)


@app.command()
def check(
    target: str = typer.Argument(
        ".",
        help="Repository root to check",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-check timeout in seconds (0 disables; default 300)",
    ),
    skip: Optional[list[str]] = typer.Option(
        None,
        "--skip",
        help="Check name to skip (repeatable)",
    ),
    soft: Optional[list[str]] = typer.Option(
        None,
        "--soft",
        help="Check name whose failure only warns (repeatable)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging and tracebacks",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    Run the quality gate for a repository and decide whether to allow the commit.

    Examples:
        commit-gate
        commit-gate ./my-project --skip pytest
        commit-gate --format json --timeout 600
    """
    setup_logging(verbose)

    if format not in ("rich", "json"):
        err_console.print(f"[red]Error:[/red] Unknown format: {escape(format)}")
        raise typer.Exit(EXIT_INTERNAL_ERROR)

    root = Path(target).resolve()
    if not root.is_dir():
        err_console.print(f"[red]Error:[/red] Not a directory: {escape(target)}")
        raise typer.Exit(EXIT_INTERNAL_ERROR)

    reporter: Reporter
    if format == "json":
        reporter = JsonReporter()
    else:
        reporter = RichReporter(Console(highlight=False))

    try:
        config = load_config(root, timeout_seconds=timeout, skip=skip, soft=soft)
        verdict = run_gate(config, on_result=reporter.report_result)
    except GateError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_INTERNAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED)
    except Exception as e:
        if verbose:
            err_console.print_exception()
        err_console.print(f"[red]Internal error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_INTERNAL_ERROR)

    reporter.report(verdict, target)

    raise typer.Exit(EXIT_PASSED if verdict.overall_passed else EXIT_REJECTED)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
