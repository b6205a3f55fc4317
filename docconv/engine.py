from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .classifier import ClassifierEvent
from .config.model import ConverterCfg
from .context import ConversionStats, ConverterContext
from .errors import DestinationWriteError, SourceReadError, UnterminatedBlockError
from .model import SourceLine
from .report import ConversionReport

logger = logging.getLogger(__name__)


def _close_block(ctx: ConverterContext, lines: Sequence[str], closing_index: int) -> None:
    """
    Handle a closed block: fix the indentation from the following line,
    then parse the block and emit its fragments.
    """
    nxt = closing_index + 1
    if nxt < len(lines):
        ctx.indent = SourceLine(text=lines[nxt], number=nxt + 1).indent
    logger.debug("Indentation for block at line %d: %d", ctx.classifier.block.opened_at, ctx.indent)

    ctx.parser.parse(ctx.classifier.block, ctx.indent)
    ctx.blocks += 1
    ctx.classifier.block.clear()


def _finish_unterminated(ctx: ConverterContext) -> None:
    block = ctx.classifier.block
    if not block:
        return
    ctx.unterminated = True
    policy = ctx.cfg.on_unterminated
    if policy == "error":
        raise UnterminatedBlockError(block.opened_at, ctx.source)
    if policy == "flush":
        logger.warning("Comment block opened at line %d is never closed; copied unchanged", block.opened_at)
        ctx.output.extend([line.text for line in block.lines])
    else:
        logger.warning("Comment block opened at line %d is never closed; dropped", block.opened_at)
    block.clear()
    ctx.classifier.in_comment = False


def run_context(ctx: ConverterContext, lines: Sequence[str]) -> None:
    """Single pass over the source lines; results accumulate in ctx.output."""
    for i, text in enumerate(lines):
        ctx.line_no = i + 1
        line = SourceLine(text=text, number=ctx.line_no)
        event = ctx.classifier.feed(line)
        if event is ClassifierEvent.PASS_THROUGH:
            ctx.output.append(text)
        elif event is ClassifierEvent.CLOSE:
            _close_block(ctx, lines, i)
    _finish_unterminated(ctx)


def convert_lines(
    lines: Sequence[str],
    cfg: Optional[ConverterCfg] = None,
    *,
    source: Optional[Path] = None,
) -> Tuple[List[str], ConversionStats]:
    """
    Convert a sequence of lines (line breaks kept).

    Args:
        lines: Source lines, each with its own line break
        cfg: Converter configuration (defaults when None)
        source: Source path for error messages

    Returns:
        Tuple of (output lines, conversion statistics)

    Raises:
        UnterminatedBlockError: if a block never closes and the policy is "error"
    """
    ctx = ConverterContext(cfg or ConverterCfg(), source)
    run_context(ctx, lines)
    return ctx.output.lines, ctx.stats()


def split_lines(text: str) -> List[str]:
    """Split on \\n, \\r\\n and \\r, keeping line breaks untranslated."""
    return list(io.StringIO(text, newline=""))


def convert_text(
    text: str,
    cfg: Optional[ConverterCfg] = None,
    *,
    source: Optional[Path] = None,
) -> Tuple[str, ConversionStats]:
    ctx = ConverterContext(cfg or ConverterCfg(), source)
    run_context(ctx, split_lines(text))
    return ctx.output.text(), ctx.stats()


def _read_source(path: Path, encoding: Optional[str]) -> List[str]:
    try:
        with path.open("r", encoding=encoding, newline="") as f:
            return f.readlines()
    except UnicodeDecodeError as e:
        raise SourceReadError(path, str(e)) from e
    except OSError as e:
        raise SourceReadError(path, e.strerror or str(e)) from e


def _write_destination(path: Path, text: str, encoding: Optional[str]) -> None:
    if not path.parent.is_dir():
        raise DestinationWriteError(path, f"directory '{path.parent}' does not exist")
    try:
        with path.open("w", encoding=encoding, newline="") as f:
            f.write(text)
    except UnicodeEncodeError as e:
        raise DestinationWriteError(path, str(e)) from e
    except OSError as e:
        raise DestinationWriteError(path, e.strerror or str(e)) from e


def run_convert(source: Path, destination: Path, cfg: Optional[ConverterCfg] = None) -> ConversionReport:
    """
    Convert a source file into a destination file.

    The source is read and converted completely in memory before the
    destination is opened, so a failed read or conversion never leaves
    a destination file behind.

    Args:
        source: Source text file
        destination: Destination text file (created or overwritten)
        cfg: Converter configuration (defaults when None)

    Returns:
        ConversionReport with the run statistics
    """
    cfg = cfg or ConverterCfg()
    lines = _read_source(source, cfg.encoding)
    logger.debug("Read %d line(s) from %s", len(lines), source)

    out, stats = convert_lines(lines, cfg, source=source)
    _write_destination(destination, "".join(out), cfg.encoding)
    logger.debug("Wrote %d line(s) to %s", stats.lines_written, destination)

    return ConversionReport.from_stats(stats, source=source, destination=destination)


__all__ = ["convert_lines", "convert_text", "split_lines", "run_convert", "run_context"]
