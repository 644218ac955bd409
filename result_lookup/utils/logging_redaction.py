"""
Logging redaction helpers.
Redacts record store credentials from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # Supabase keys are JWTs: header.payload.signature
    (re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "[REDACTED]"),
    # apikey header or config output
    (re.compile(r"(?i)(apikey|api[_-]?key|anon[_-]?key)(['\"]?\s*[:=]\s*['\"]?)([A-Za-z0-9\-\._]+)"), r"\1\2[REDACTED]"),
)

_SECRETS: set[str] = set()


def register_secret(value: str | None) -> None:
    """Redact this exact value wherever it appears, whatever its shape."""
    if value and len(value) >= 4:
        _SECRETS.add(value)


def redact_message(message: str) -> str:
    redacted = message
    for secret in _SECRETS:
        redacted = redacted.replace(secret, "[REDACTED]")
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args; let the handler report it
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def install_redaction_filter() -> None:
    root = logging.getLogger()
    # Logger filters skip propagated records, so handlers get one as well
    for target in (root, *root.handlers):
        if any(isinstance(existing, RedactingFilter) for existing in target.filters):
            continue
        target.addFilter(RedactingFilter())
