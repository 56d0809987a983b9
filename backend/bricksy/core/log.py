"""
Logging setup with masking of credentials in log output.
"""
import logging
import re
import sys
from typing import Optional

_SENSITIVE_PATTERNS = [
    (re.compile(r"(bearer\s+)([A-Za-z0-9_\-\.]{20,})", re.IGNORECASE), r"\1***REDACTED***"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)([A-Za-z0-9_\-\.]{20,})", re.IGNORECASE), r"\1***REDACTED***"),
    (re.compile(r"(password\s*[:=]\s*['\"]?)([^'\"\s,}]+)", re.IGNORECASE), r"\1***REDACTED***"),
    (re.compile(r"(\$2[aby]\$\d{2}\$)[./A-Za-z0-9]{53}"), r"\1***REDACTED***"),
    # Keep the domain of email addresses, hide the local part
    (re.compile(r"[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})"), r"***@\1"),
]

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


def sanitize_message(message: str) -> str:
    """Mask tokens, passwords, bcrypt digests and email local parts."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class SensitiveDataFilter(logging.Filter):
    """Rewrite each record's message through ``sanitize_message``."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            return True
        record.msg = sanitize_message(message)
        record.args = None
        return True


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once; repeated calls only adjust the level."""
    from bricksy.core.config import settings

    level = (level or settings.LOG_LEVEL or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(level)

    if any(getattr(h, "_bricksy", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.addFilter(SensitiveDataFilter())
    handler._bricksy = True
    root.addHandler(handler)
