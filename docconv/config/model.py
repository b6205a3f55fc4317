from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Literal, Optional

from ..errors import ConfigError

ParamContinuation = Literal["prepend", "append"]
UnterminatedPolicy = Literal["error", "flush", "drop"]


# --- helpers ---------------------------------------------------------------
def _assert_only_keys(d: Dict[str, Any] | None, allowed: Iterable[str], *, ctx: str) -> None:
    if d is None:
        return
    allowed_set = set(allowed)
    extra = set(d.keys()) - allowed_set
    if extra:
        raise ConfigError(f"{ctx}: unknown key(s): {', '.join(sorted(extra))}")


def _mapping(d: Dict[str, Any], key: str, *, ctx: str) -> Dict[str, Any]:
    val = d.get(key)
    if val is None:
        return {}
    if not isinstance(val, dict):
        raise ConfigError(f"{ctx}.{key}: expected mapping, got {type(val).__name__}")
    return val


def _str(d: Dict[str, Any], key: str, default: str, *, ctx: str) -> str:
    val = d.get(key, default)
    if not isinstance(val, str):
        raise ConfigError(f"{ctx}.{key}: expected string, got {type(val).__name__}")
    if not val:
        raise ConfigError(f"{ctx}.{key}: must not be empty")
    return val


@dataclass(frozen=True)
class MarkerCfg:
    """Delimiters of the source convention and the target doc marker."""

    open: str = "{@@"
    """Substring that opens a comment block."""

    close: str = "}"
    """Character(s) a trimmed line must end with to close a block."""

    line_comment: str = "//"
    """Line-comment marker; shadows delimiters and sentinels after it."""

    doc: str = "///"
    """Marker prefixed to every emitted line."""

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> MarkerCfg:
        _assert_only_keys(d, ["open", "close", "line_comment", "doc"], ctx="markers")
        base = MarkerCfg()
        return MarkerCfg(
            open=_str(d, "open", base.open, ctx="markers"),
            close=_str(d, "close", base.close, ctx="markers"),
            line_comment=_str(d, "line_comment", base.line_comment, ctx="markers"),
            doc=_str(d, "doc", base.doc, ctx="markers"),
        )


@dataclass(frozen=True)
class SentinelCfg:
    """Text that drives the section state machine (matched case-insensitively)."""
    summary: str = "Summary:"
    parameters: str = "Parameters:"
    returns: str = "Returns:"
    description: str = "Description:"   # header line dropped inside Summary
    param_separator: str = " - "
    returns_none: str = "  None."       # Returns body meaning "nothing to document"

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> SentinelCfg:
        keys = ["summary", "parameters", "returns", "description", "param_separator", "returns_none"]
        _assert_only_keys(d, keys, ctx="sentinels")
        base = SentinelCfg()
        return SentinelCfg(**{k: _str(d, k, getattr(base, k), ctx="sentinels") for k in keys})


@dataclass(frozen=True)
class TagCfg:
    """Tag names of the target convention."""
    summary: str = "summary"
    param: str = "param"
    returns: str = "returns"
    param_attr: str = "name"

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> TagCfg:
        keys = ["summary", "param", "returns", "param_attr"]
        _assert_only_keys(d, keys, ctx="tags")
        base = TagCfg()
        return TagCfg(**{k: _str(d, k, getattr(base, k), ctx="tags") for k in keys})


@dataclass(frozen=True)
class ConverterCfg:
    """
    Converter configuration.

    Defaults describe the {@@ ... } source convention and the /// target
    convention, so an empty or missing config needs no overrides.
    """
    markers: MarkerCfg = field(default_factory=MarkerCfg)
    sentinels: SentinelCfg = field(default_factory=SentinelCfg)
    tags: TagCfg = field(default_factory=TagCfg)
    # "prepend" puts continuation lines newest-first in front of the description
    param_continuation: ParamContinuation = "prepend"
    on_unterminated: UnterminatedPolicy = "error"
    # None → platform line separator for emitted lines
    newline: Optional[str] = None
    # None → platform default text encoding
    encoding: Optional[str] = None

    @property
    def line_separator(self) -> str:
        return self.newline if self.newline is not None else os.linesep

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> ConverterCfg:
        if not d:
            return ConverterCfg()
        if not isinstance(d, dict):
            raise ConfigError(f"config: expected mapping, got {type(d).__name__}")
        _assert_only_keys(
            d,
            ["markers", "sentinels", "tags", "param_continuation", "on_unterminated", "newline", "encoding"],
            ctx="config",
        )

        param_continuation = d.get("param_continuation", "prepend")
        if param_continuation not in ("prepend", "append"):
            raise ConfigError(
                f"config.param_continuation: expected 'prepend' or 'append', got {param_continuation!r}"
            )
        on_unterminated = d.get("on_unterminated", "error")
        if on_unterminated not in ("error", "flush", "drop"):
            raise ConfigError(
                f"config.on_unterminated: expected 'error', 'flush' or 'drop', got {on_unterminated!r}"
            )

        newline = d.get("newline")
        if newline is not None and newline not in ("\n", "\r\n", "\r"):
            raise ConfigError(f"config.newline: unsupported line separator {newline!r}")
        encoding = d.get("encoding")
        if encoding is not None and not isinstance(encoding, str):
            raise ConfigError(f"config.encoding: expected string, got {type(encoding).__name__}")

        return ConverterCfg(
            markers=MarkerCfg.from_dict(_mapping(d, "markers", ctx="config")),
            sentinels=SentinelCfg.from_dict(_mapping(d, "sentinels", ctx="config")),
            tags=TagCfg.from_dict(_mapping(d, "tags", ctx="config")),
            param_continuation=param_continuation,
            on_unterminated=on_unterminated,
            newline=newline,
            encoding=encoding,
        )


__all__ = ["MarkerCfg", "SentinelCfg", "TagCfg", "ConverterCfg", "ParamContinuation", "UnterminatedPolicy"]
