"""
Text helpers shared by the parsers and repositories.
"""
import re
from typing import Optional

_WHITESPACE_RUN = re.compile(r"\s+")


def cleanup(value: str) -> str:
    """Trim and collapse interior whitespace runs to a single space."""
    return _WHITESPACE_RUN.sub(" ", value).strip()


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    """Cut value to max_length characters. None passes through."""
    if value is None or len(value) <= max_length:
        return value
    return value[:max_length]
