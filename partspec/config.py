"""Configuration loader for the part spec parser."""

import logging
import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, fields

from .tokenizer import DEFAULT_DELIMITER

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PARTSPEC_CONFIG"
OUTPUT_FORMATS = ("table", "json", "csv")


@dataclass
class TokenizerConfig:
    delimiter: str = DEFAULT_DELIMITER
    legacy_pair_merge: bool = False
    split_unrecognized: bool = False


@dataclass
class OutputConfig:
    format: str = "table"
    directory: Optional[str] = None


@dataclass
class PartSpecConfig:
    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def default_search_paths():
    return [
        Path.cwd() / 'partspec.yaml',
        Path.home() / '.partspec' / 'config.yaml',
    ]


def _build(section_cls, raw: Optional[Dict[str, Any]], section: str):
    """Build a config section, rejecting keys the dataclass doesn't know."""
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config section '{section}' must be a mapping")
    known = {f.name for f in fields(section_cls)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown keys in config section '{section}': {sorted(unknown)}")
    return section_cls(**raw)


def validate_config(config: PartSpecConfig) -> PartSpecConfig:
    """
    Check config values.

    Raises:
        ValueError: invalid delimiter regex, delimiter that matches the
            empty string, non-boolean tokenizer switch, or unknown output
            format
    """
    for name in ("legacy_pair_merge", "split_unrecognized"):
        value = getattr(config.tokenizer, name)
        if not isinstance(value, bool):
            raise ValueError(f"tokenizer.{name} must be true or false, got {value!r}")
    if not isinstance(config.tokenizer.delimiter, str):
        raise ValueError(f"tokenizer.delimiter must be a string, got {config.tokenizer.delimiter!r}")

    try:
        delimiter = re.compile(config.tokenizer.delimiter)
    except re.error as e:
        raise ValueError(f"Invalid delimiter pattern {config.tokenizer.delimiter!r}: {e}")
    if delimiter.match(""):
        raise ValueError(f"Delimiter pattern {config.tokenizer.delimiter!r} matches empty text")

    if config.output.format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format {config.output.format!r}, expected one of {OUTPUT_FORMATS}"
        )
    return config


def load_config(config_path: Optional[str] = None) -> PartSpecConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses $PARTSPEC_CONFIG or
            looks in default locations, falling back to built-in defaults.

    Returns:
        PartSpecConfig object

    Raises:
        FileNotFoundError: an explicitly requested file does not exist
        ValueError: the file has unknown keys or invalid values
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or None

    if config_path is not None:
        if not Path(config_path).exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for path in default_search_paths():
            if path.exists():
                config_path = str(path)
                break
        else:
            logger.debug("No config file found, using defaults")
            return PartSpecConfig()

    logger.info(f"Loading config: {config_path}")
    with open(config_path, encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    unknown = set(raw) - {'tokenizer', 'output'}
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")

    return validate_config(PartSpecConfig(
        tokenizer=_build(TokenizerConfig, raw.get('tokenizer'), 'tokenizer'),
        output=_build(OutputConfig, raw.get('output'), 'output'),
    ))
