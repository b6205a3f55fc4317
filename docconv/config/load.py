from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ConverterCfg
from ..errors import ConfigError

_yaml = YAML(typ="safe")

logger = logging.getLogger(__name__)


def load_config(path: Path) -> ConverterCfg:
    """
    Load converter configuration from a YAML file.

    An empty document yields the default configuration.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed ConverterCfg

    Raises:
        ConfigError: if the file is missing, not valid YAML or holds invalid values
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(raw).__name__}")

    cfg = ConverterCfg.from_dict(raw)
    logger.debug("Loaded config from %s: %s", path, cfg)
    return cfg


__all__ = ["load_config"]
