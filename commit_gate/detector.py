"""Ecosystem detection from marker files."""

import logging
from pathlib import Path

from commit_gate.checks.models import Ecosystem

logger = logging.getLogger(__name__)

# 优先级固定：第一个命中的标记文件决定生态
MARKER_FILES: list[tuple[str, Ecosystem]] = [
    ("package.json", Ecosystem.NODE),
    ("go.mod", Ecosystem.GO),
    ("Cargo.toml", Ecosystem.RUST),
    ("requirements.txt", Ecosystem.PYTHON),
    ("pyproject.toml", Ecosystem.PYTHON),
]


def detect(root_dir: Path) -> Ecosystem:
    """
    Detect the project ecosystem of ``root_dir``.

    Marker files are probed in fixed priority order; the first hit wins.
    A missing or unreadable directory yields ``Ecosystem.UNKNOWN``.
    """
    for marker, ecosystem in MARKER_FILES:
        try:
            found = (root_dir / marker).is_file()
        except OSError as e:
            logger.warning(f"Cannot probe {root_dir / marker}: {e}")
            return Ecosystem.UNKNOWN
        if found:
            logger.debug(f"Found {marker}, ecosystem is {ecosystem.value}")
            return ecosystem
    return Ecosystem.UNKNOWN
