"""Human-readable renderings of second counts."""

from __future__ import annotations


def format_clock(seconds: int) -> str:
    """Exam clock text: ``M:SS`` below an hour, ``H:MM:SS`` above."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """Result summary text such as ``1h 2m 3s``, ``4m 5s`` or ``6s``."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def option_letter(index: int) -> str:
    return chr(ord("A") + index)
