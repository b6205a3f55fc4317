"""
Sentinel matching for the section state machine.

A sentinel is "active" on a line when it occurs (case-insensitively)
before any line-comment marker, or when the line has no such marker at all.
Text inside a trailing line comment never switches sections.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from .model import SectionKind


@lru_cache(maxsize=64)
def _pattern(sentinel: str) -> re.Pattern[str]:
    return re.compile(re.escape(sentinel), re.IGNORECASE)


def _first_occurrence(line: str, sentinel: str) -> Optional[re.Match[str]]:
    if not sentinel:
        return None
    return _pattern(sentinel).search(line)


def _shadowed(line: str, pos: int, line_comment: str) -> bool:
    marker = line.find(line_comment) if line_comment else -1
    return 0 <= marker <= pos


def sentinel_active(line: str, sentinel: str, line_comment: str = "//") -> bool:
    """
    Check whether a sentinel is active on a line.

    Args:
        line: Line text
        sentinel: Sentinel text, e.g. "Summary:"
        line_comment: Line-comment marker that shadows everything after it

    Returns:
        True if the sentinel occurs before the first line-comment marker
        (or the line has no marker), False otherwise
    """
    m = _first_occurrence(line, sentinel)
    return m is not None and not _shadowed(line, m.start(), line_comment)


@dataclass(frozen=True)
class SentinelMatch:
    kind: SectionKind
    start: int  # position of the sentinel in the line
    end: int    # position right after the sentinel

    def remainder(self, line: str, line_comment: str = "//") -> str:
        """Text following the sentinel up to a trailing line comment, whitespace stripped."""
        rest = line[self.end:]
        if line_comment and line_comment in rest:
            rest = rest[: rest.index(line_comment)]
        return rest.strip()


def find_sentinel(
    line: str,
    sentinels: Sequence[Tuple[SectionKind, str]],
    line_comment: str = "//",
) -> Optional[SentinelMatch]:
    """
    Find the section sentinel that switches state on this line.

    When several sentinels are active on the same line the earliest one wins.

    Args:
        line: Line text
        sentinels: (section kind, sentinel text) pairs to look for
        line_comment: Line-comment marker

    Returns:
        SentinelMatch of the winning sentinel, or None
    """
    best: Optional[SentinelMatch] = None
    for kind, sentinel in sentinels:
        if not sentinel_active(line, sentinel, line_comment):
            continue
        m = _first_occurrence(line, sentinel)
        assert m is not None
        if best is None or m.start() < best.start:
            best = SentinelMatch(kind=kind, start=m.start(), end=m.end())
    return best


__all__ = ["sentinel_active", "find_sentinel", "SentinelMatch"]
