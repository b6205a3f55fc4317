"""
Data model of the conversion pipeline.
Source lines, collected comment blocks, parsed sections and emitted fragments.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .indent import leading_spaces


def strip_eol(text: str) -> str:
    """Remove a trailing line break (\\n, \\r\\n or \\r) if present."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n") or text.endswith("\r"):
        return text[:-1]
    return text


@dataclass(frozen=True)
class SourceLine:
    """One input line together with its 1-based position."""
    text: str    # raw text, line break included
    number: int  # 1-based

    @property
    def body(self) -> str:
        """Line text without its line break."""
        return strip_eol(self.text)

    @property
    def trimmed(self) -> str:
        return self.text.strip()

    @property
    def indent(self) -> int:
        return leading_spaces(self.text)


@dataclass
class CommentBlock:
    """
    Lines of one comment block, from the opening delimiter line
    to the closing delimiter line inclusive.
    """
    lines: List[SourceLine] = field(default_factory=list)

    def add(self, line: SourceLine) -> None:
        self.lines.append(line)

    def clear(self) -> None:
        self.lines.clear()

    @property
    def opened_at(self) -> int:
        return self.lines[0].number if self.lines else 0

    def __len__(self) -> int:
        return len(self.lines)

    def __bool__(self) -> bool:
        return bool(self.lines)


class SectionKind(enum.Enum):
    NONE = "none"
    SUMMARY = "summary"
    PARAMETERS = "parameters"
    RETURNS = "returns"


@dataclass
class ParamEntry:
    """A single `<name> - <description>` entry of the Parameters section."""
    name: str
    body: List[str] = field(default_factory=list)

    def text(self) -> str:
        return "\n".join(self.body)


@dataclass
class Section:
    """Accumulated free-text body of the currently active section."""
    kind: SectionKind
    body: List[str] = field(default_factory=list)
    # Only used by the Parameters section
    pending: Optional[ParamEntry] = None

    def add(self, text: str) -> None:
        self.body.append(text)

    def text(self) -> str:
        """Body lines joined; the joined form never starts with a separator."""
        return "\n".join(self.body)


@dataclass(frozen=True)
class EmittedFragment:
    """A tagged comment fragment in the target convention."""
    tag: str
    body: str
    indent: int = 0
    attribute: Optional[str] = None  # e.g. 'name="x"' for parameters

    @property
    def open_tag(self) -> str:
        if self.attribute:
            return f"<{self.tag} {self.attribute}>"
        return f"<{self.tag}>"

    @property
    def close_tag(self) -> str:
        return f"</{self.tag}>"

    def body_lines(self) -> List[str]:
        return self.body.split("\n")


class OutputDocument:
    """Ordered output lines: pass-through source lines mixed with fragment lines."""

    def __init__(self) -> None:
        self._lines: List[str] = []

    def append(self, line: str) -> None:
        self._lines.append(line)

    def extend(self, lines: List[str]) -> None:
        self._lines.extend(lines)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def text(self) -> str:
        return "".join(self._lines)

    def __len__(self) -> int:
        return len(self._lines)


__all__ = [
    "strip_eol",
    "SourceLine",
    "CommentBlock",
    "SectionKind",
    "ParamEntry",
    "Section",
    "EmittedFragment",
    "OutputDocument",
]
