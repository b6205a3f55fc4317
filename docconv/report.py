from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .context import ConversionStats


class ConversionReport(BaseModel):
    """Outcome of one successful run, printed with --report."""
    model_config = ConfigDict(populate_by_name=True)

    source: str
    destination: str
    lines_read: int = Field(alias="linesRead")
    lines_written: int = Field(alias="linesWritten")
    blocks: int
    fragments: Dict[str, int] = Field(default_factory=dict)
    skipped_returns: int = Field(default=0, alias="skippedReturns")
    unterminated: bool = False

    @classmethod
    def from_stats(cls, stats: ConversionStats, *, source: Path, destination: Path) -> ConversionReport:
        return cls(
            source=str(source),
            destination=str(destination),
            lines_read=stats.lines_read,
            lines_written=stats.lines_written,
            blocks=stats.blocks,
            fragments=dict(stats.fragments),
            skipped_returns=stats.skipped_returns,
            unterminated=stats.unterminated,
        )


def dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


__all__ = ["ConversionReport", "dumps"]
