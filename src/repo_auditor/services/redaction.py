"""Scrub credential-looking strings from README text before it leaves for the LLM."""

from __future__ import annotations

import re

_REDACTED = "[REDACTED]"

_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"AKIA[0-9A-Z]{16}"),
    re.compile(r"gh[pousr]_[A-Za-z0-9_]{36,}"),
    re.compile(r"sk-[A-Za-z0-9_\-]{20,}"),
    re.compile(r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----"),
    re.compile(r"eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}"),
    re.compile(
        r"(?:api[_\-]?key|secret[_\-]?key|access[_\-]?token)"
        r"""\s*[:=]\s*['"]?[A-Za-z0-9_\-/+]{20,}['"]?""",
        re.IGNORECASE,
    ),
)


def redact_secrets(text: str) -> tuple[str, int]:
    """Return *text* with secret-like matches replaced, plus the number replaced."""
    total = 0
    for pattern in _PATTERNS:
        text, count = pattern.subn(_REDACTED, text)
        total += count
    return text, total
