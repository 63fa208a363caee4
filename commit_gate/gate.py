"""Gate orchestration and verdict aggregation.

检查流程：
1. 检测生态
2. 查找注册表中的检查
3. 依次执行检查
4. 扫描暂存区密钥（总是执行）
5. 汇总结论
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from commit_gate.checks.models import CheckResult, CheckStatus, Ecosystem
from commit_gate.checks.registry import CheckRegistry
from commit_gate.config import GateConfig
from commit_gate.detector import detect
from commit_gate.errors import DiffUnavailableError
from commit_gate.repo import staged_diff
from commit_gate.runner import CheckRunner
from commit_gate.scanner.secrets import SecretFinding, SecretScanner

logger = logging.getLogger(__name__)

PASS_BANNER = "All quality checks passed."
FAIL_BANNER = "Quality gate failed."
SECRET_SCAN_NAME = "Secret scan"
INTERRUPTED = "interrupted"


def summary_line(result: CheckResult) -> str:
    """Format ``<check-name> ... <PASS|FAIL|SKIP>`` for one result."""
    line = f"{result.check_name} ... {result.label}"
    if result.status is CheckStatus.FAILED and result.is_soft_failure:
        line += " (advisory)"
    return line


@dataclass(frozen=True)
class GateVerdict:
    """
    最终结论，是退出码和报告的唯一来源

    Attributes:
        overall_passed: 没有阻断性失败且没有疑似密钥
        results: 按执行顺序排列的检查结果
        secrets_found: 密钥扫描是否命中
        secret_findings: 命中的密钥详情
        ecosystem: 本次运行检测到的生态
        summary: 可读的汇总文本（每个检查一行，最后是结论横幅）
    """
    overall_passed: bool
    results: tuple[CheckResult, ...]
    secrets_found: bool
    secret_findings: tuple[SecretFinding, ...] = ()
    ecosystem: Ecosystem = Ecosystem.UNKNOWN
    summary: str = ""

    @property
    def banner(self) -> str:
        return PASS_BANNER if self.overall_passed else FAIL_BANNER

    @property
    def exit_code(self) -> int:
        return 0 if self.overall_passed else 1

    @property
    def interrupted(self) -> bool:
        return any(r.detail == INTERRUPTED for r in self.results)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "ecosystem": self.ecosystem.value,
            "passed": self.overall_passed,
            "secrets_found": self.secrets_found,
            "results": [r.to_dict() for r in self.results],
            "secret_findings": [f.to_dict() for f in self.secret_findings],
            "summary": self.summary,
        }


def aggregate(
    results: Iterable[CheckResult],
    secrets_found: bool,
    secret_findings: Iterable[SecretFinding] = (),
    ecosystem: Ecosystem = Ecosystem.UNKNOWN,
) -> GateVerdict:
    """
    Fold check results into a verdict.

    The gate fails if and only if a non-soft check failed or secrets were
    found. Skipped checks and soft failures never fail it.
    """
    results = tuple(results)
    overall_passed = not secrets_found and not any(r.is_blocking for r in results)

    lines = [summary_line(r) for r in results]
    lines.append(f"{SECRET_SCAN_NAME} ... {'FAIL' if secrets_found else 'PASS'}")
    lines.append(PASS_BANNER if overall_passed else FAIL_BANNER)

    return GateVerdict(
        overall_passed=overall_passed,
        results=results,
        secrets_found=secrets_found,
        secret_findings=tuple(secret_findings),
        ecosystem=ecosystem,
        summary="\n".join(lines),
    )


def run_gate(
    config: GateConfig,
    registry: CheckRegistry | None = None,
    runner: CheckRunner | None = None,
    diff_source: Callable[[Path], str] = staged_diff,
    on_result: Callable[[CheckResult], None] | None = None,
) -> GateVerdict:
    """
    Run the whole gate for ``config.root``.

    Checks run sequentially in registry order. If the user interrupts a
    check, it is recorded as failed, the remaining checks as skipped, and
    the secret scan still runs before the verdict is built.

    Args:
        config: Run configuration
        registry: Check table (defaults to the built-in one)
        runner: Check runner (defaults to one built from ``config``)
        diff_source: Returns the staged diff for a root directory
        on_result: Called after each check finishes, for progress output
    """
    registry = registry or CheckRegistry.default()
    runner = runner or CheckRunner(config)

    unknown = sorted((config.skip | config.soft) - registry.check_names())
    if unknown:
        logger.warning(f"No check named {', '.join(unknown)}; skip/soft entries ignored")

    ecosystem = detect(config.root)
    definitions = registry.checks_for(ecosystem)
    logger.info(f"Detected ecosystem: {ecosystem.value} ({len(definitions)} checks)")

    results: list[CheckResult] = []
    interrupted = False
    for definition in definitions:
        if interrupted:
            result = CheckResult(
                check_name=definition.name,
                status=CheckStatus.SKIPPED,
                is_soft_failure=definition.is_soft_failure,
                detail=INTERRUPTED,
            )
        else:
            try:
                result = runner.run(definition)
            except KeyboardInterrupt:
                logger.warning(f"Interrupted while running {definition.name}")
                interrupted = True
                # 用户中断总是阻断提交
                result = CheckResult(
                    check_name=definition.name,
                    status=CheckStatus.FAILED,
                    detail=INTERRUPTED,
                )
        results.append(result)
        if on_result is not None:
            on_result(result)

    try:
        diff_text = diff_source(config.root)
    except DiffUnavailableError as e:
        logger.warning(f"{e}; secret scan skipped over an empty diff")
        diff_text = ""

    scanner = SecretScanner(exclude=config.secret_exclude)
    findings = scanner.find_secrets(diff_text)

    return aggregate(results, bool(findings), findings, ecosystem)
