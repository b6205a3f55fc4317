from __future__ import annotations


def leading_spaces(text: str) -> int:
    """
    Count leading space characters of a line.

    Only ' ' is counted; a tab or any other character stops the count.

    Args:
        text: Line text (line break may be included)

    Returns:
        Number of spaces before the first non-space character
    """
    n = 0
    for ch in text:
        if ch != " ":
            break
        n += 1
    return n


__all__ = ["leading_spaces"]
