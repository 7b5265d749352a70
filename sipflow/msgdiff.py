"""Line-by-line comparison of two SIP message payloads."""

from __future__ import annotations


def _lines(payload: str) -> list[tuple[int, str]]:
    """Return (start offset, text) of every newline-terminated line."""
    result = []
    start = 0
    while True:
        end = payload.find("\n", start)
        if end < 0:
            return result
        result.append((start, payload[start : end + 1]))
        start = end + 1


def line_highlight(payload1: str, payload2: str) -> list[bool]:
    """Mark the characters of ``payload1`` whose line is not in ``payload2``.

    Returns one flag per character of ``payload1``. A line, including its
    line break, counts as present when it appears anywhere in
    ``payload2``. A final line without a line break is never marked.
    """
    highlight = [False] * len(payload1)
    for start, line in _lines(payload1):
        if line not in payload2:
            highlight[start : start + len(line)] = [True] * len(line)
    return highlight


def differing_lines(payload1: str, payload2: str) -> list[str]:
    """Return the lines of ``payload1`` (with their line break) not found in ``payload2``."""
    return [line for _, line in _lines(payload1) if line not in payload2]