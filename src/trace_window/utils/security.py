"""Secret redaction and output sanitization.

Call arguments and fault messages end up in rendered reports and log
entries. This module removes credentials from them before they leave the
process, and strips terminal control sequences from text that is written
to a console.

Redaction is fail-closed: if a pattern cannot be compiled or applied, an
exception is raised instead of returning the unredacted text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_call = redactor.redact("connect(password='hunter2hunter2hunter2')")

    Attributes:
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        # Keyword arguments and assignments
        (
            r"(?i)(api[_-]?key|secret|token|passw(?:or)?d|credential)\s*[=:]\s*[\"']?[\w-]{16,}[\"']?",
            "Generic secret",
        ),
        # Service access tokens
        (r"xox[baprs]-[\w-]+", "Slack token"),
        (r"gh[pousr]_[a-zA-Z0-9]{36}", "GitHub token"),
        (r"github_pat_[a-zA-Z0-9_]{22,}", "GitHub fine-grained PAT"),
        # Secret API keys
        (r"sk-ant-[\w-]{40,}", "Anthropic API key"),
        (r"sk-proj-[a-zA-Z0-9]{20,}", "OpenAI project API key"),
        (r"sk-[a-zA-Z0-9]{48}", "OpenAI legacy API key"),
        (r"AKIA[0-9A-Z]{16}", "AWS access key ID"),
        (r"AIza[0-9A-Za-z\-_]{35}", "Google API key"),
        (r"sk_live_[a-zA-Z0-9]{24,}", "Stripe secret key"),
        # Connection strings with inline credentials
        (
            r"(?i)(postgres(?:ql)?|mysql|mongodb(?:\+srv)?|redis|amqp)://[^:\s]+:[^@\s]+@[^\s'\",)]+",
            "Database connection string",
        ),
        # Key material
        (
            r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----",
            "Private key header",
        ),
        (r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*", "JWT token"),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.
            custom_patterns: Additional (pattern, name) tuples to detect.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        all_patterns = list(self.DEFAULT_PATTERNS)
        if custom_patterns:
            all_patterns.extend(custom_patterns)

        for pattern_str, name in all_patterns:
            try:
                self._pattern_names[re.compile(pattern_str)] = name
            except re.error as e:
                log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
                raise RedactionError(f"Failed to compile secret pattern '{name}': {e}") from e

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names)

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with the placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            for pattern in self._pattern_names:
                text = pattern.sub(self.placeholder, text)
        except Exception as e:
            log.error("redaction_failed", error=str(e))
            raise RedactionError(f"Redaction failed: {e}") from e
        return text

    def has_secrets(self, text: str) -> bool:
        """Check if text contains any secrets."""
        if not text:
            return False
        return any(pattern.search(text) for pattern in self._pattern_names)


def sanitize_for_terminal(text: str) -> str:
    """Remove ANSI escape codes and control characters from text.

    Newlines and tabs are kept.

    Args:
        text: The text to sanitize.

    Returns:
        The text with ANSI codes and control characters removed.
    """
    if not text:
        return text

    text = re.sub(r"\x1b\[[0-9;]*[A-Za-z]", "", text)
    return re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
