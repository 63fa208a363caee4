"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式

每个检查一行 `<名称> ... <PASS|FAIL|SKIP>`，然后是失败输出、疑似密钥和结论横幅。
"""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from commit_gate.checks.models import CheckResult, CheckStatus
from commit_gate.gate import SECRET_SCAN_NAME, GateVerdict, summary_line

# (图标, 颜色)
PASS_STYLE = ("✓", "green")
FAIL_STYLE = ("✗", "red")
SOFT_FAIL_STYLE = ("!", "yellow")
SKIP_STYLE = ("○", "dim")

# 最多显示的疑似密钥数量
MAX_FINDINGS = 10


def _style_for(result: CheckResult) -> tuple[str, str]:
    if result.status is CheckStatus.PASSED:
        return PASS_STYLE
    if result.status is CheckStatus.SKIPPED:
        return SKIP_STYLE
    return SOFT_FAIL_STYLE if result.is_soft_failure else FAIL_STYLE


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None, show_output: bool = True):
        self.console = console or Console()
        self.show_output = show_output

    def report_result(self, result: CheckResult) -> None:
        """
        打印单个检查的结果行

        非终端（管道、钩子日志）只输出 `<名称> ... <PASS|FAIL|SKIP>`，
        图标、原因和耗时只在终端中显示
        """
        icon, color = _style_for(result)
        line = Text(summary_line(result), style=color)
        if self.console.is_terminal:
            line = Text(f"{icon} ", style=f"bold {color}") + line
            if result.detail and result.status is not CheckStatus.PASSED:
                line.append(f"  {result.detail}", style="dim")
            if result.duration_ms:
                line.append(f"  {result.duration_ms / 1000:.1f}s", style="dim")
        self.console.print(line)

    def report(self, verdict: GateVerdict, target: str) -> None:
        """生成最终报告"""
        if self.show_output:
            self._print_failure_output(verdict)

        self._print_secret_scan(verdict)

        self.console.print()
        color = "green" if verdict.overall_passed else "red"
        banner = Text(verdict.banner, style=f"bold {color}")
        if verdict.interrupted:
            banner.append(" (interrupted)", style="dim")
        self.console.print(banner)

    def _print_failure_output(self, verdict: GateVerdict) -> None:
        """打印失败检查的输出末尾"""
        for result in verdict.results:
            if result.status is not CheckStatus.FAILED or not result.output_tail:
                continue
            _, color = _style_for(result)
            self.console.print(Panel(
                Text(result.output_tail),
                title=Text(result.check_name, style=f"bold {color}"),
                title_align="left",
                border_style=color,
            ))

    def _print_secret_scan(self, verdict: GateVerdict) -> None:
        """打印密钥扫描结果"""
        icon, color = FAIL_STYLE if verdict.secrets_found else PASS_STYLE
        line = Text()
        if self.console.is_terminal:
            line.append(f"{icon} ", style=f"bold {color}")
        line.append(f"{SECRET_SCAN_NAME} ... {'FAIL' if verdict.secrets_found else 'PASS'}", style=color)
        self.console.print(line)

        for finding in verdict.secret_findings[:MAX_FINDINGS]:
            location = finding.file_path or "<input>"
            self.console.print(Text(
                f"    {location}:{finding.line_number}  {finding.pattern_name}: {finding.line}",
                style="red",
            ))

        remaining = len(verdict.secret_findings) - MAX_FINDINGS
        if remaining > 0:
            self.console.print(Text(f"    ... {remaining} more not shown", style="dim"))
