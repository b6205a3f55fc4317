"""
Line classifier and block collector.

Decides for every source line whether it passes through unchanged
or belongs to a comment block, and collects the block's lines.
"""

from __future__ import annotations

import enum
import logging

from .config.model import MarkerCfg
from .model import CommentBlock, SourceLine

logger = logging.getLogger(__name__)


class ClassifierEvent(enum.Enum):
    PASS_THROUGH = "pass"   # line is not part of any block
    COLLECT = "collect"     # line was added to the open block
    CLOSE = "close"         # line was added and closed the block


class LineClassifier:
    """
    Tracks the "in comment" flag across lines.

    The collected block stays available in `block` after a CLOSE event
    until the caller clears it.
    """

    def __init__(self, markers: MarkerCfg):
        self.markers = markers
        self.in_comment = False
        self.block = CommentBlock()

    def opens_block(self, text: str) -> bool:
        return self.markers.open in text and self.markers.line_comment not in text

    def closes_block(self, line: SourceLine) -> bool:
        trimmed = line.trimmed
        return trimmed.endswith(self.markers.close) and not trimmed.startswith(self.markers.line_comment)

    def feed(self, line: SourceLine) -> ClassifierEvent:
        if not self.in_comment and not self.opens_block(line.text):
            return ClassifierEvent.PASS_THROUGH

        if not self.in_comment:
            logger.debug("Comment block opened at line %d", line.number)
            self.in_comment = True
        self.block.add(line)

        if self.closes_block(line):
            self.in_comment = False
            logger.debug("Comment block closed at line %d (%d line(s))", line.number, len(self.block))
            return ClassifierEvent.CLOSE
        return ClassifierEvent.COLLECT


__all__ = ["ClassifierEvent", "LineClassifier"]
