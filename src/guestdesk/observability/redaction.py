"""Redaction helpers for safe logging.

Guest submissions carry names, emails and phone numbers. Anything taken
from a submission or a room's occupant columns passes through these
before it reaches a log line.
"""

import re
from typing import Any

_PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-()]{8,}\d")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

_REDACTED = "[REDACTED]"

# Keys whose values are personal data no matter what they look like
PII_KEYS = frozenset({"guest_name", "email", "phone", "special_requests"})


def redact_string(value: str) -> str:
    """Redact phone and email patterns from free text."""
    result = _PHONE_PATTERN.sub(_REDACTED, value)
    result = _EMAIL_PATTERN.sub(_REDACTED, result)
    return result


def mask_name(name: str) -> str:
    """Initials only: "Jane Doe" -> "J. D."."""
    parts = [p for p in name.split() if p]
    if not parts:
        return ""
    return " ".join(f"{p[0].upper()}." for p in parts)


def redact_value(value: Any) -> str:
    """Redact any value for safe logging. Returns string representation."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return redact_string(value)
    if isinstance(value, dict):
        return f"dict(keys={list(value.keys())})"
    if isinstance(value, (list, tuple)):
        return f"list(len={len(value)})"
    return f"<{type(value).__name__}>"


def safe_log_context(**kwargs: Any) -> dict[str, str]:
    """Build a context dict safe for logging. All values are redacted."""
    context: dict[str, str] = {}
    for key, value in kwargs.items():
        if key == "guest_name" and isinstance(value, str):
            context[key] = mask_name(value)
        elif key in PII_KEYS:
            context[key] = _REDACTED if value else ""
        else:
            context[key] = redact_value(value)
    return context
