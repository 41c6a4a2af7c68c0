#!/usr/bin/env python3
"""PII gate for guestdesk source files.

Fails if:
- print( is called in runtime code (src/**)
- a logger call mentions a guest field (name, email, phone, requests)
  outside a safe_log_context(...) call

Usage:
    python scripts/gate_security_pii.py
"""

import ast
import sys
from pathlib import Path

LOG_METHODS = {"debug", "info", "warning", "error", "critical", "exception"}

# Attribute or variable names carrying guest data
GUEST_FIELDS = {"guest_name", "email", "phone", "special_requests"}

REDACTORS = {"safe_log_context", "redact_value", "redact_string", "mask_name"}


def _call_name(node: ast.Call) -> str:
    func = node.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return ""


def _is_logger_call(node: ast.Call) -> bool:
    func = node.func
    return (
        isinstance(func, ast.Attribute)
        and func.attr in LOG_METHODS
        and isinstance(func.value, ast.Name)
        and func.value.id in ("logger", "log")
    )


def _raw_guest_fields(node: ast.AST) -> list[str]:
    """Guest field names referenced under node, not passed through a redactor."""
    if isinstance(node, ast.Call) and _call_name(node) in REDACTORS:
        return []
    found = []
    if isinstance(node, ast.Name) and node.id in GUEST_FIELDS:
        found.append(node.id)
    elif isinstance(node, ast.Attribute) and node.attr in GUEST_FIELDS:
        found.append(node.attr)
    for child in ast.iter_child_nodes(node):
        found.extend(_raw_guest_fields(child))
    return found


def check_source(source: str, filename: str = "<string>") -> list[str]:
    """Check one module's source. Returns error messages."""
    errors = []
    for node in ast.walk(ast.parse(source, filename=filename)):
        if not isinstance(node, ast.Call):
            continue
        if isinstance(node.func, ast.Name) and node.func.id == "print":
            errors.append(f"{filename}:{node.lineno}: print() not allowed in runtime code")
        elif _is_logger_call(node):
            for field in sorted(set(_raw_guest_fields(node))):
                errors.append(
                    f"{filename}:{node.lineno}: logger call with '{field}' "
                    "must use redaction (safe_log_context)"
                )
    return errors


def main() -> int:
    src_dir = Path(__file__).resolve().parent.parent / "src"
    if not src_dir.exists():
        sys.stderr.write("Error: src directory not found\n")
        return 1

    all_errors: list[str] = []
    for pyfile in sorted(src_dir.rglob("*.py")):
        all_errors.extend(check_source(pyfile.read_text(encoding="utf-8"), str(pyfile)))

    if all_errors:
        sys.stderr.write("PII gate FAILED:\n")
        for err in all_errors:
            sys.stderr.write(f"  {err}\n")
        return 1

    sys.stdout.write("PII gate PASSED\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
