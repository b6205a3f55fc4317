from __future__ import annotations

# Public API:
#  • convert_text / convert_lines — in-memory conversion
#  • run_convert — file to file conversion with a run report
#  • ConverterCfg / load_config — configuration
from .config import ConverterCfg, load_config
from .engine import convert_lines, convert_text, run_convert
from .errors import DocConvUserError

__all__ = ["convert_text", "convert_lines", "run_convert", "ConverterCfg", "load_config", "DocConvUserError"]
