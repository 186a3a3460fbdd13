#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Config Loader Module

Loads pipeline settings from a YAML file and merges them over the defaults.
Settings are checked against CONFIG_SCHEMA; unknown keys and invalid values
are all reported together in one ConfigError.
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from jsonschema import Draft7Validator

from ..core.errors import ConfigError
from ..core.models import ImageMergePolicy
from ..extractors.note_extractor import DEFAULT_TITLE_SUFFIX

DEFAULT_CONFIG: Dict[str, Any] = {
    'timeout': 30,
    'user_agent': None,
    'accept_language': None,
    'proxy': None,
    'verify_ssl': True,
    'max_workers': 4,
    'max_per_host': 2,
    'min_host_delay': 0.5,
    'host_delays': {},
    'image_policy': ImageMergePolicy.PREFER_PRIMARY_IMAGES.value,
    'title_suffix': DEFAULT_TITLE_SUFFIX,
    'parser': 'lxml',
}

SUPPORTED_PARSERS = ('lxml', 'html.parser')

CONFIG_SCHEMA: Dict[str, Any] = {
    'type': 'object',
    'additionalProperties': False,
    'properties': {
        'timeout': {'type': 'number', 'exclusiveMinimum': 0},
        'user_agent': {'type': ['string', 'null']},
        'accept_language': {'type': ['string', 'null']},
        'proxy': {'type': ['string', 'null']},
        'verify_ssl': {'type': 'boolean'},
        'max_workers': {'type': 'integer', 'minimum': 1},
        'max_per_host': {'type': 'integer', 'minimum': 1},
        'min_host_delay': {'type': 'number', 'minimum': 0},
        # Host name to seconds between request starts, overriding min_host_delay
        'host_delays': {
            'type': 'object',
            'additionalProperties': {'type': 'number', 'minimum': 0},
        },
        'image_policy': {'enum': [policy.value for policy in ImageMergePolicy]},
        'title_suffix': {'type': 'string'},
        'parser': {'enum': list(SUPPORTED_PARSERS)},
    },
}

_CONFIG_VALIDATOR = Draft7Validator(CONFIG_SCHEMA)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML config file and merge it over DEFAULT_CONFIG.

    Args:
        path: Path to the YAML file

    Returns:
        Complete configuration dictionary

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    p = Path(path)

    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")

    try:
        raw_text = p.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {p}") from e

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {p}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML in {p} must be a mapping")

    return build_config(data)


def build_config(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate `overrides` and merge them over DEFAULT_CONFIG.

    Args:
        overrides: Partial configuration

    Returns:
        Complete configuration dictionary

    Raises:
        ConfigError: On unknown keys or invalid values
    """
    errors = sorted(
        _CONFIG_VALIDATOR.iter_errors(dict(overrides)),
        key=lambda error: [str(part) for part in error.absolute_path]
    )
    if errors:
        raise ConfigError(_format_schema_errors(errors))

    config = dict(DEFAULT_CONFIG)
    config.update(overrides)
    return config


def _format_schema_errors(errors) -> str:
    lines = ["Invalid configuration:"]
    for error in errors:
        location = '.'.join(str(part) for part in error.absolute_path) or '<root>'
        lines.append(f"- {location}: {error.message}")
    return "\n".join(lines)
