"""
Terminal helpers for the in-place progress display.
"""
from typing import Optional

ESC = "\x1b"
CURSOR_UP = f"{ESC}[1A"
CLEAR_LINE = f"{ESC}[2K"
LINE_START = "\r"

MILLIS_PER_SECOND = 1000
MILLIS_PER_MINUTE = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE
MILLIS_PER_DAY = 24 * MILLIS_PER_HOUR


def up_n_lines(n: int) -> str:
    """Escape sequence moving the cursor up n lines to the line start."""
    if n <= 0:
        return ""
    return CURSOR_UP * n + LINE_START


def millis_to_pretty(millis: Optional[int]) -> str:
    """
    Render a duration as "Xd Yh Zm", omitting zero parts.

    Durations under a minute, and unknown (None) durations, render as "0s".

    Examples:
        90_000        -> '1m'
        3_720_000     -> '1h 2m'
        90_000_000    -> '1d 1h'
    """
    if millis is None or millis < MILLIS_PER_MINUTE:
        return "0s"

    days, millis = divmod(millis, MILLIS_PER_DAY)
    hours, millis = divmod(millis, MILLIS_PER_HOUR)
    minutes = millis // MILLIS_PER_MINUTE

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    return " ".join(parts)
