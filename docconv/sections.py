"""
Section parser: an explicit state machine over the lines of one comment block.

States are SectionKind values. A sentinel line (Summary:/Parameters:/Returns:)
finalizes the active section and starts a new one; every other line is handed
to the handler of the active section. Finalized sections are passed to the
emitter in the order they are left.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from .config.model import ConverterCfg
from .emitter import CommentEmitter
from .model import CommentBlock, ParamEntry, Section, SectionKind
from .sentinels import find_sentinel

logger = logging.getLogger(__name__)


class SectionParser:
    """
    Walks a collected comment block and emits the recognized sections.

    One parser is reused for every block of a run; all per-block state
    is reset at the start of parse().
    """

    def __init__(self, cfg: ConverterCfg, emitter: CommentEmitter):
        self.cfg = cfg
        self.emitter = emitter
        s = cfg.sentinels
        self._sentinels = (
            (SectionKind.SUMMARY, s.summary),
            (SectionKind.PARAMETERS, s.parameters),
            (SectionKind.RETURNS, s.returns),
        )
        self._handlers: Dict[SectionKind, Callable[[str], None]] = {
            SectionKind.NONE: self._on_none,
            SectionKind.SUMMARY: self._on_summary,
            SectionKind.PARAMETERS: self._on_parameter,
            SectionKind.RETURNS: self._on_returns,
        }
        self._finalizers: Dict[SectionKind, Callable[[], None]] = {
            SectionKind.NONE: lambda: None,
            SectionKind.SUMMARY: self._finish_summary,
            SectionKind.PARAMETERS: self._finish_parameters,
            SectionKind.RETURNS: self._finish_returns,
        }
        self._section = Section(SectionKind.NONE)
        self._indent = 0
        self.skipped_returns = 0

    @property
    def state(self) -> SectionKind:
        return self._section.kind

    # ---------------------------- driving ---------------------------- #

    def parse(self, block: CommentBlock, indent: int) -> None:
        """
        Parse one block and emit its sections.

        Args:
            block: Lines from the opening to the closing delimiter inclusive
            indent: Indentation width for every fragment of this block
        """
        self._indent = indent
        self._section = Section(SectionKind.NONE)
        last = len(block.lines) - 1

        for i, line in enumerate(block.lines):
            text = line.body
            closing = i == last
            if closing:
                text = self._strip_close_marker(text)

            match = find_sentinel(text, self._sentinels, self.cfg.markers.line_comment)
            if match is not None:
                self._enter(match.kind)
                rest = match.remainder(text, self.cfg.markers.line_comment)
                if rest:
                    self._handlers[self.state](rest)
                continue

            if not closing:
                self._handlers[self.state](text)
            elif text.strip() and self.state is not SectionKind.RETURNS:
                # Text before the closing delimiter still belongs to the section
                self._handlers[self.state](text)

        self._enter(SectionKind.NONE)

    def _strip_close_marker(self, text: str) -> str:
        close = self.cfg.markers.close
        stripped = text.rstrip()
        if stripped.endswith(close):
            return stripped[: -len(close)].rstrip()
        return text

    def _enter(self, kind: SectionKind) -> None:
        """Finalize the active section and start a fresh one."""
        self._finalizers[self.state]()
        logger.debug("Section %s -> %s", self.state.value, kind.value)
        self._section = Section(kind)

    # ---------------------------- handlers ---------------------------- #

    def _on_none(self, text: str) -> None:
        # Text outside any section is not documented
        pass

    def _on_summary(self, text: str) -> None:
        if text.strip().lower() == self.cfg.sentinels.description.lower():
            return
        self._section.add(text)

    def _on_parameter(self, text: str) -> None:
        sep = self.cfg.sentinels.param_separator
        if sep in text:
            self._flush_parameter()
            name, _, description = text.partition(sep)
            self._section.pending = ParamEntry(name=name.strip(), body=[" " + description])
            return

        pending = self._section.pending
        if pending is None:
            if text.strip():
                logger.warning("Parameter text without a parameter name dropped: %r", text.strip())
            return
        if self.cfg.param_continuation == "prepend":
            pending.body.insert(0, text)
        else:
            pending.body.append(text)

    def _on_returns(self, text: str) -> None:
        self._section.add(text)

    # ---------------------------- finalizers ---------------------------- #

    def _finish_summary(self) -> None:
        self.emitter.summary(self._section.text(), self._indent)

    def _flush_parameter(self) -> None:
        pending = self._section.pending
        if pending is not None:
            self.emitter.param(pending.name, pending.text(), self._indent)
            self._section.pending = None

    def _finish_parameters(self) -> None:
        self._flush_parameter()

    def _finish_returns(self) -> None:
        body = self._section.text()
        if body == self.cfg.sentinels.returns_none:
            self.skipped_returns += 1
            logger.debug("Returns section holds no value, nothing emitted")
            return
        self.emitter.returns(body, self._indent)


__all__ = ["SectionParser"]
