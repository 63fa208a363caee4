"""
正则表达式模式定义

密钥扫描使用的模式和白名单。所有模式大小写不敏感。
"""

import re

# (名称, 模式)
SECRET_PATTERNS: list[tuple[str, re.Pattern]] = [
    (
        "credential assignment",
        re.compile(
            r'(?:password|passwd|pwd|secret|api[_-]?key|access[_-]?key|auth[_-]?token'
            r'|token|client[_-]?secret|private[_-]?key)\w*["\']?\s*[:=]\s*["\'][^"\'\n]{4,}["\']',
            re.IGNORECASE,
        ),
    ),
    (
        # .env / YAML 风格：值不带引号，至少含一个数字，且占据到行尾（或注释）
        "unquoted credential",
        re.compile(
            r'(?:password|passwd|pwd|secret|api[_-]?key|access[_-]?key|auth[_-]?token'
            r'|token|client[_-]?secret|private[_-]?key)\w*\s*[:=]\s*'
            r'(?=[^\s"\'#]*\d)[^\s"\'#(){}\[\],;$]{8,}(?=\s*(?:#.*)?$)',
            re.IGNORECASE,
        ),
    ),
    ("AWS access key id", re.compile(r'\b(?:AKIA|ASIA)[0-9A-Z]{16}\b', re.IGNORECASE)),
    (
        "private key block",
        re.compile(r'-----BEGIN (?:RSA |EC |DSA |OPENSSH |PGP |ENCRYPTED )?PRIVATE KEY', re.IGNORECASE),
    ),
    ("GitHub token", re.compile(r'\bgh[pousr]_[A-Za-z0-9]{36,}', re.IGNORECASE)),
    ("Slack token", re.compile(r'\bxox[abprs]-[A-Za-z0-9-]{10,}', re.IGNORECASE)),
    ("Stripe live key", re.compile(r'\b[sr]k_live_[0-9A-Za-z]{16,}', re.IGNORECASE)),
    ("bearer token", re.compile(r'\bbearer\s+[A-Za-z0-9\-._~+/]{20,}=*', re.IGNORECASE)),
]

# 包含这些词的行视为示例/测试数据，不报告
# 注意：按子串匹配，"latest" 也会命中 "test"
ALLOW_LIST_WORDS: tuple[str, ...] = ("example", "sample", "test", "mock")

ALLOW_LIST_PATTERN: re.Pattern = re.compile(
    "|".join(re.escape(word) for word in ALLOW_LIST_WORDS),
    re.IGNORECASE,
)

# diff 结构
DIFF_FILE_HEADER = re.compile(r'^\+\+\+ (?:b/)?(.+?)\s*$')
DIFF_HUNK_HEADER = re.compile(r'^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@')
