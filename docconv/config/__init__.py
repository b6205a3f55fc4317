from __future__ import annotations

# Public API of config package:
#  • ConverterCfg — typed converter configuration (defaults = {@@ ... } to /// conventions)
#  • load_config — YAML loader
from .load import load_config
from .model import ConverterCfg, MarkerCfg, SentinelCfg, TagCfg

__all__ = ["ConverterCfg", "MarkerCfg", "SentinelCfg", "TagCfg", "load_config"]
