"""
Comment emitter for the target convention.

Every fragment becomes:

    <indent>/// <tag[ attribute]>
    <indent>/// <body line>
    <indent>/// </tag>

Body content is written verbatim, without escaping.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .config.model import ConverterCfg
from .model import EmittedFragment

logger = logging.getLogger(__name__)


def render_fragment(fragment: EmittedFragment, doc_marker: str = "///", newline: str = "\n") -> List[str]:
    """
    Render a fragment into output lines.

    Args:
        fragment: Fragment to render
        doc_marker: Comment marker put in front of every line
        newline: Line separator appended to every line

    Returns:
        Lines with line separators included
    """
    prefix = " " * fragment.indent + doc_marker + " "
    lines = [prefix + fragment.open_tag + newline]
    for body_line in fragment.body_lines():
        lines.append(prefix + body_line + newline)
    lines.append(prefix + fragment.close_tag + newline)
    return lines


class CommentEmitter:
    """
    Builds tagged fragments and hands their rendered lines to a sink.
    """

    def __init__(self, cfg: ConverterCfg, sink: Callable[[List[str]], None]):
        self.cfg = cfg
        self._sink = sink
        self.fragments: List[EmittedFragment] = []

    def emit(self, tag: str, body: str, indent: int, attribute: Optional[str] = None) -> EmittedFragment:
        fragment = EmittedFragment(tag=tag, body=body, indent=indent, attribute=attribute)
        self._sink(render_fragment(fragment, self.cfg.markers.doc, self.cfg.line_separator))
        self.fragments.append(fragment)
        logger.debug("Emitted <%s%s> (%d body line(s), indent %d)",
                     tag, f" {attribute}" if attribute else "", len(fragment.body_lines()), indent)
        return fragment

    def summary(self, body: str, indent: int) -> EmittedFragment:
        return self.emit(self.cfg.tags.summary, body, indent)

    def param(self, name: str, body: str, indent: int) -> EmittedFragment:
        attribute = f'{self.cfg.tags.param_attr}="{name}"'
        return self.emit(self.cfg.tags.param, body, indent, attribute)

    def returns(self, body: str, indent: int) -> EmittedFragment:
        return self.emit(self.cfg.tags.returns, body, indent)


__all__ = ["render_fragment", "CommentEmitter"]
