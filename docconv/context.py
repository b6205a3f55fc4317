"""
Per-run converter context.

Holds everything that changes while a source is converted: the resolved
indentation width, the classifier with its pending block, the output
document and the counters. One instance is created per run.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .classifier import LineClassifier
from .config.model import ConverterCfg
from .emitter import CommentEmitter
from .model import OutputDocument
from .sections import SectionParser


@dataclass
class ConversionStats:
    lines_read: int = 0
    lines_written: int = 0
    blocks: int = 0
    fragments: Dict[str, int] = field(default_factory=dict)
    skipped_returns: int = 0
    unterminated: bool = False


class ConverterContext:
    """
    State of a single conversion run.

    Args:
        cfg: Converter configuration
        source: Source path, only used in messages
    """

    def __init__(self, cfg: ConverterCfg, source: Optional[Path] = None):
        self.cfg = cfg
        self.source = source
        # Width last resolved from the line after a block; 0 before the first block
        self.indent = 0
        self.line_no = 0
        self.output = OutputDocument()
        self.classifier = LineClassifier(cfg.markers)
        self.emitter = CommentEmitter(cfg, self.output.extend)
        self.parser = SectionParser(cfg, self.emitter)
        self.blocks = 0
        self.unterminated = False

    def stats(self) -> ConversionStats:
        return ConversionStats(
            lines_read=self.line_no,
            lines_written=len(self.output),
            blocks=self.blocks,
            fragments=dict(Counter(f.tag for f in self.emitter.fragments)),
            skipped_returns=self.parser.skipped_returns,
            unterminated=self.unterminated,
        )


__all__ = ["ConversionStats", "ConverterContext"]
