"""Helpers for reading unified-diff patches."""

from typing import Optional


def is_added_line(line: str) -> bool:
    """True for an added line, excluding the ``+++`` file header."""
    return line.startswith("+") and not line.startswith("+++")


def added_lines(patch: Optional[str]) -> list[str]:
    """Added lines of a patch, still carrying their leading ``+``."""
    if not patch:
        return []
    return [line for line in patch.split("\n") if is_added_line(line)]
